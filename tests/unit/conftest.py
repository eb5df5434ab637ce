"""Shared fixtures for unit tests

Fixtures:
    - `vocabulary`: small fixed word list.
    - `clock`: controllable source of "now" for the shortener engine.
    - `short_link_dao`: in-memory ShortLinkBaseDAO with failure injection.
    - `message_dao`: in-memory MessageBaseDAO with failure injection.
"""

import threading
from datetime import datetime, timedelta, UTC

import pytest

from wordshortener.dao.base import MessageBaseDAO, ShortLinkBaseDAO
from wordshortener.dao.exceptions import DataStoreError, MessageDoesNotExistError, ShortLinkNotFoundError
from wordshortener.models import MessageModel, ShortLinkModel


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class InMemoryShortLinkDAO(ShortLinkBaseDAO):
    """Dict-backed ShortLinkBaseDAO

    Set `fail_<operation>` to an exception instance to make that operation raise it.
    `fail_delete_words` makes delete_expired() fail for specific words only.
    """

    def __init__(self):
        self.records: dict[str, ShortLinkModel] = {}
        self.lock = threading.Lock()
        self.fail_insert: BaseException | None = None
        self.fail_get: BaseException | None = None
        self.fail_scan: BaseException | None = None
        self.fail_active: BaseException | None = None
        self.fail_delete_words: set[str] = set()

    def insert(self, link, **kwargs):
        if self.fail_insert is not None:
            raise self.fail_insert
        with self.lock:
            self.records[link.word] = link
        return self

    def get(self, word, **kwargs):
        if self.fail_get is not None:
            raise self.fail_get
        with self.lock:
            try:
                return self.records[word]
            except KeyError:
                raise ShortLinkNotFoundError(f"Short link with word '{word}' not found.") from None

    def delete_expired(self, word, now, **kwargs):
        if word in self.fail_delete_words:
            raise DataStoreError(f"Can't delete '{word}'.")
        with self.lock:
            link = self.records.get(word)
            if link is None or not link.is_expired(now):
                return False
            del self.records[word]
            return True

    def scan_expired(self, now, **kwargs):
        if self.fail_scan is not None:
            raise self.fail_scan
        with self.lock:
            expired = [link for link in self.records.values() if link.is_expired(now)]
        return [link.word for link in sorted(expired, key=lambda link: link.expires_at)]

    def active_words(self, **kwargs):
        if self.fail_active is not None:
            raise self.fail_active
        with self.lock:
            return list(self.records)


class InMemoryMessageDAO(MessageBaseDAO):
    def __init__(self):
        self.messages: list[MessageModel] = []
        self.fail_save: BaseException | None = None
        self.fail_read: BaseException | None = None

    def save(self, message, visitor_id=None, **kwargs):
        if self.fail_save is not None:
            raise self.fail_save
        saved = MessageModel(id=len(self.messages) + 1, message=message, created_at=datetime.now(UTC), visitor_id=visitor_id)
        self.messages.append(saved)
        return saved

    def get(self, message_id, **kwargs):
        if self.fail_read is not None:
            raise self.fail_read
        for message in self.messages:
            if message.id == message_id:
                return message
        raise MessageDoesNotExistError(f"Message with ID '{message_id}' does not exist.")

    def get_all(self, limit=None, reverse=True, **kwargs):
        if self.fail_read is not None:
            raise self.fail_read
        messages = list(reversed(self.messages)) if reverse else list(self.messages)
        return messages if limit is None else messages[:limit]


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def vocabulary():
    return ('otter', 'heron', 'maple')


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 17, 12, 0, tzinfo=UTC))


@pytest.fixture
def short_link_dao():
    return InMemoryShortLinkDAO()


@pytest.fixture
def message_dao():
    return InMemoryMessageDAO()
