"""URL shortener engine: allocation, lookup, expiry and reclamation of short links

The engine is the only writer of short link records and the only mutator of
the WordPool. It keeps the two consistent through three rules:

    1. A word is taken from the pool *before* its record is written, and given
       back if the write does not complete, whatever the reason.
    2. A word is given back to the pool only after its record was removed by a
       conditional delete that re-checks the expiry inside the store.
    3. On start(), every word with a stored record is reserved again.

Expired links are detected lazily on lookup and reclaimed on the spot; a
background sweep thread also reclaims them every `sweep_interval`, so words
nobody looks up still return to the pool.

Procedure of shorten(url):
    - Step 1: Validate the URL (InvalidUrlError, no side effects)
    - Step 2: Take a random free word (NoAvailableWordsError when exhausted)
    - Step 3: Store the link with expiry = now + ttl (StorageError on failure,
              the word is released first)
    - Step 4: Return the stored ShortLinkModel

Example:
    >>> engine = ShortenerEngine(dao, WordPool(load_words()), ttl=timedelta(days=1),
    ...                          sweep_interval=timedelta(minutes=1)).start()
    >>> link = engine.shorten('https://example.com/article/123')
    >>> engine.lookup(link.word)
    'https://example.com/article/123'
    >>> engine.close()
"""

import logging
import threading
from datetime import datetime, timedelta

from wordshortener.dao.base import ShortLinkBaseDAO
from wordshortener.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from wordshortener.exceptions import NoAvailableWordsError, StorageError, UrlNotFoundError
from wordshortener.models import ShortLinkModel
from wordshortener.services.word_pool import WordPool
from wordshortener.types import Clock
from wordshortener.utils.helpers import utcnow
from wordshortener.utils.urls import validate_url


logger = logging.getLogger(__name__)


class ShortenerEngine:
    """Public contract for creating and resolving short links

    Attributes:
        dao (ShortLinkBaseDAO):
            Durable store of short links.
        pool (WordPool):
            Free/assigned bookkeeping of the vocabulary.
        ttl (timedelta):
            Lifetime of every link.
        sweep_interval (timedelta):
            Period of the background reclamation sweep.

    Methods:
        start() -> ShortenerEngine
        shorten(url: str) -> ShortLinkModel
        lookup(word: str) -> str
        sweep() -> int
        close() -> None
    """

    SWEEPER_THREAD_NAME = 'shortener-sweep'

    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        pool: WordPool,
        ttl: timedelta,
        sweep_interval: timedelta,
        clock: Clock = utcnow,
    ):
        if ttl <= timedelta(0):
            raise ValueError(f'Link TTL must be positive (given value: {ttl}).')
        if sweep_interval <= timedelta(0):
            raise ValueError(f'Sweep interval must be positive (given value: {sweep_interval}).')

        self.dao = dao
        self.pool = pool
        self.ttl = ttl
        self.sweep_interval = sweep_interval
        self._clock = clock

        self._lifecycle_lock = threading.Lock()
        # Words whose conditional delete failed without an answer; guarded by _reclaim_lock
        self._reclaim_lock = threading.Lock()
        self._unconfirmed: set[str] = set()
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None
        self._closed = False

    @property
    def available(self) -> int:
        """Number of words that can still be allocated"""
        return self.pool.free_count

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def start(self) -> 'ShortenerEngine':
        """Rebuild the pool from the store, sweep once and start the sweep thread

        Calling start() on a running engine does nothing.

        Raises:
            StorageError:
                If the stored words can't be read. The engine must not hand out
                words without knowing which ones are taken.
            RuntimeError:
                If the engine was already closed.
        """
        with self._lifecycle_lock:
            if self._closed:
                raise RuntimeError('Shortener engine is closed.')
            if self._sweeper is not None:
                return self

            self._rehydrate()
            self.sweep()

            self._sweeper = threading.Thread(target=self._run_sweeper, name=self.SWEEPER_THREAD_NAME, daemon=True)
            self._sweeper.start()

        logger.info(
            'Shortener engine started.',
            extra={'vocabulary': len(self.pool), 'available': self.available, 'sweepInterval': self.sweep_interval.total_seconds()},
        )
        return self

    def close(self, timeout: float | None = 10.0) -> None:
        """Stop the sweep thread. Safe to call any number of times.

        shorten() and lookup() keep working afterwards; expired words are then
        only reclaimed lazily, by lookups.
        """
        with self._lifecycle_lock:
            if self._closed:
                return
            self._closed = True
            self._stop.set()
            sweeper = self._sweeper

        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join(timeout)
            if sweeper.is_alive():
                logger.warning('Sweep thread did not stop in time.', extra={'timeout': timeout})
        logger.info('Shortener engine closed.')

    # -------------------------------
    # Public operations
    # -------------------------------

    def shorten(self, url: str) -> ShortLinkModel:
        """Allocate a word for `url` and persist the link

        A URL that already has a live link still gets a new word.

        Raises:
            InvalidUrlError:
                If `url` is not an absolute URL. Nothing is allocated.
            NoAvailableWordsError:
                If every word is bound to a live link.
            StorageError:
                If the link can't be stored. The word is back in the pool.
        """
        url = validate_url(url)

        word = self.pool.try_allocate()
        if word is None:
            logger.warning('No available words left in the pool.', extra={'vocabulary': len(self.pool)})
            raise NoAvailableWordsError('no available words')

        persisted = False
        try:
            now = self._clock()
            link = ShortLinkModel(word=word, url=url, created_at=now, expires_at=now + self.ttl)
            self.dao.insert(link)
            persisted = True
        except DataStoreError as e:
            logger.error('Failed to store short link. Releasing word.', extra={'word': word}, exc_info=True)
            raise StorageError(f"Can't store short link for word '{word}'.") from e
        finally:
            # Runs for every failure, including interrupts, so the word is never leaked
            if not persisted:
                self.pool.release(word)

        logger.info('Created short link.', extra={'word': word, 'expiry': link.expires_at.isoformat()})
        return link

    def lookup(self, word: str) -> str:
        """Resolve `word` to its URL

        Absent and expired links are reported the same way. An expired link
        is reclaimed before returning; if that fails, the sweep retries later.

        Raises:
            UrlNotFoundError:
                If the word has no live link.
            StorageError:
                If the store can't be read.
        """
        if word not in self.pool:
            raise UrlNotFoundError(f"No short link for word '{word}'.")

        try:
            link = self.dao.get(word)
        except ShortLinkNotFoundError as e:
            raise UrlNotFoundError(f"No short link for word '{word}'.") from e
        except DataStoreError as e:
            logger.error('Failed to read short link.', extra={'word': word}, exc_info=True)
            raise StorageError(f"Can't read short link for word '{word}'.") from e

        now = self._clock()
        if link.is_expired(now):
            logger.debug('Short link expired on lookup.', extra={'word': word})
            try:
                self._reclaim(word, now)
            except DataStoreError:
                logger.warning('Lazy reclamation failed. The sweep will retry.', extra={'word': word}, exc_info=True)
            raise UrlNotFoundError(f"No short link for word '{word}'.")

        return link.url

    def sweep(self) -> int:
        """Reclaim every expired link once; return the number of reclaimed words

        Failures never propagate: a failed scan is retried next interval, a
        failed deletion skips that word only. A deletion that failed without
        an answer may still have removed the record, so such words are looked
        up again first and released once their record is confirmed gone.
        """
        reclaimed = self._confirm_unresolved()

        now = self._clock()
        try:
            expired = self.dao.scan_expired(now)
        except DataStoreError:
            logger.exception('Failed to scan for expired short links.')
            return reclaimed

        for word in expired:
            try:
                if self._reclaim(word, now):
                    reclaimed += 1
            except DataStoreError:
                logger.exception('Failed to reclaim expired short link. Retrying next sweep.', extra={'word': word})

        if expired:
            logger.info('Sweep finished.', extra={'expired': len(expired), 'reclaimed': reclaimed, 'available': self.available})
        return reclaimed

    # -------------------------------
    # Internals
    # -------------------------------

    def _reclaim(self, word: str, now: datetime) -> bool:
        with self._reclaim_lock:
            try:
                deleted = self.dao.delete_expired(word, now)
            except DataStoreError:
                self._unconfirmed.add(word)
                raise
            if not deleted:
                return False
            self._unconfirmed.discard(word)
            self._release(word)
        logger.info('Reclaimed expired short link.', extra={'word': word})
        return True

    def _confirm_unresolved(self) -> int:
        with self._reclaim_lock:
            words = sorted(self._unconfirmed)

        released = 0
        for word in words:
            with self._reclaim_lock:
                if word not in self._unconfirmed:
                    continue
                try:
                    self.dao.get(word)
                except ShortLinkNotFoundError:
                    self._unconfirmed.discard(word)
                    self._release(word)
                    released += 1
                    logger.info('Reclaimed short link after an unanswered delete.', extra={'word': word})
                    continue
                except DataStoreError:
                    logger.warning('Failed to check short link state. Retrying next sweep.', extra={'word': word}, exc_info=True)
                    continue
                # Still stored, so the expiry scan takes it from here
                self._unconfirmed.discard(word)
        return released

    def _release(self, word: str) -> None:
        # Records left over from an older vocabulary are deleted but have no pool slot
        if word in self.pool:
            self.pool.release(word)

    def _rehydrate(self) -> None:
        try:
            words = self.dao.active_words()
        except DataStoreError as e:
            raise StorageError("Can't load stored short links.") from e

        reserved = 0
        for word in words:
            if word not in self.pool:
                logger.warning('Stored short link uses a word outside the vocabulary.', extra={'word': word})
                continue
            if self.pool.reserve(word):
                reserved += 1
        logger.debug('Rebuilt word pool from the store.', extra={'reserved': reserved})

    def _run_sweeper(self) -> None:
        interval = self.sweep_interval.total_seconds()
        while not self._stop.wait(interval):
            try:
                self.sweep()
            except Exception:
                logger.exception('Unexpected error in sweep thread.')
