"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, PostgreSQL).

Responsibilities:
    - Provide an interface for inserting, retrieving and reclaiming ShortLinkModel objects.
    - Expose an expiry-ordered scan so expired links can be found without a full table walk.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, timedelta, UTC
        >>> from wordshortener.models import ShortLinkModel
        >>> from wordshortener.dao.redis import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(...)

        >>> now = datetime.now(UTC)
        >>> dao.insert(ShortLinkModel(
        ...     word="otter",
        ...     url="https://example.com/blog/article-123",
        ...     created_at=now,
        ...     expires_at=now + timedelta(days=1),
        ... ))

        >>> dao.get("otter").url
        'https://example.com/blog/article-123'

        >>> dao.scan_expired(now + timedelta(days=2))
        ['otter']
        >>> dao.delete_expired("otter", now + timedelta(days=2))
        True

NOTE:
    - The DAO never decides which word a link gets. Word exclusivity is owned by
      the WordPool; `insert()` simply overwrites whatever record the word had.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from wordshortener.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        insert(link: ShortLinkModel) -> ShortLinkBaseDAO:
            Persist a link and index it by expiry, atomically.
            Raises DataStoreError on connection or write failure.

        get(word: str) -> ShortLinkModel:
            Retrieve a link by word, expired or not.
            Raises ShortLinkNotFoundError if there is no record.
            Raises DataStoreError on connection or read failure.

        delete_expired(word: str, now: datetime) -> bool:
            Delete the link only if it is still expired at `now`.
            Returns True if something was removed.
            Raises DataStoreError on connection or write failure.

        scan_expired(now: datetime) -> list[str]:
            Words whose indexed expiry is before `now`, oldest first.
            Raises DataStoreError on connection or read failure.

        active_words() -> list[str]:
            Every indexed word, expired or not.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def insert(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Persist a new link.

        Args:
            link (ShortLinkModel):
                The link to store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, word: str, **kwargs) -> ShortLinkModel:
        """Retrieve a link by its word.

        Raises:
            ShortLinkNotFoundError:
                If no link is stored under the given word.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete_expired(self, word: str, now: datetime, **kwargs) -> bool:
        """Conditionally delete a link whose expiry is before `now`.

        The expiry check and the deletion must be atomic with respect to a
        concurrent `insert()` of the same word.

        Returns:
            bool: True if a record (or a dangling index entry) was removed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def scan_expired(self, now: datetime, **kwargs) -> list[str]:
        """Return the words whose expiry is before `now`.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def active_words(self, **kwargs) -> list[str]:
        """Return every word that currently has a stored link.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
