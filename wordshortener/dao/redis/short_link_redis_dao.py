"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO.

Key layout (see RedisKeySchema):
    <prefix>:links:<word>     HASH  {url, created_at, expires_at}  (POSIX timestamps)
    <prefix>:links:expiry     ZSET  member=<word>, score=<expires_at>

Records carry no Redis TTL. Expired links stay in place until the shortener
reclaims them, so a word can never silently vanish from the store while the
WordPool still counts it as assigned.

Classes:
    ShortLinkRedisDAO:
        DAO for storing, retrieving and reclaiming ShortLinkModel in a Redis datastore.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> from wordshortener.models import ShortLinkModel
    >>> from wordshortener.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="wordshortener:dev")
    >>> now = datetime.now(UTC)
    >>> dao.insert(ShortLinkModel(word='otter', url='https://example.com/page',
    ...                           created_at=now, expires_at=now + timedelta(days=1)))
    <ShortLinkRedisDAO>

    >>> dao.get('otter').url
    'https://example.com/page'
"""

import logging
from datetime import datetime

import redis
from beartype import beartype

from wordshortener.models import ShortLinkModel
from wordshortener.dao.base import ShortLinkBaseDAO
from wordshortener.dao.redis.mixins import RedisClientMixin
from wordshortener.dao.redis.helpers import handle_redis_errors, to_timestamp, from_timestamp
from wordshortener.dao.exceptions import DataStoreError, ShortLinkNotFoundError


logger = logging.getLogger(__name__)


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing word to URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(link: ShortLinkModel) -> ShortLinkRedisDAO
        get(word: str) -> ShortLinkModel
        delete_expired(word: str, now: datetime) -> bool
        scan_expired(now: datetime) -> list[str]
        active_words() -> list[str]

    All methods raise DataStoreError on any Redis failure.
    """

    @handle_redis_errors
    @beartype
    def insert(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkRedisDAO':
        """Insert a short link into Redis

        The record and its expiry index entry are written in one MULTI/EXEC
        transaction so a reader never sees a link that the sweep cannot find.

        Args:
            link (ShortLinkModel):
                Link to persist. An existing record for the same word is overwritten.

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If a Redis issue occurs during the transaction.
        """
        link_key = self.keys.link_key(link.word)
        index_key = self.keys.link_expiry_index_key()
        expires_at = to_timestamp(link.expires_at)

        with self.redis.pipeline(transaction=True) as pipe:
            # fmt: off
            pipe.hset(link_key, mapping={
                'url': link.url,
                'created_at': to_timestamp(link.created_at),
                'expires_at': expires_at,
            })
            # fmt: on
            pipe.zadd(index_key, {link.word: expires_at})
            pipe.execute()
        return self

    @handle_redis_errors
    @beartype
    def get(self, word: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored link by word

        Expired links are returned as well; deciding what "expired" means for
        the caller is the shortener's job.

        Raises:
            ShortLinkNotFoundError:
                If the word has no record in Redis.
            DataStoreError:
                If Redis connectivity issues occur or the record is malformed.

        Example:
            >>> dao.get('otter')
            ShortLinkModel(word='otter', url='https://example.com', ...)
        """
        record = self.redis.hgetall(self.keys.link_key(word))
        if not record:
            raise ShortLinkNotFoundError(f"Short link with word '{word}' not found.")

        try:
            return ShortLinkModel(
                word=word,
                url=record['url'],
                created_at=from_timestamp(record['created_at']),
                expires_at=from_timestamp(record['expires_at']),
            )
        except (KeyError, ValueError) as e:
            raise DataStoreError(f"Malformed short link record for word '{word}'.") from e

    @handle_redis_errors
    @beartype
    def delete_expired(self, word: str, now: datetime, **kwargs) -> bool:
        """Delete a link only if its stored expiry is before `now`

        The record is WATCHed while its expiry is checked. If a concurrent
        insert() rewrites the word in the meantime, EXEC aborts and nothing is
        deleted, so a freshly allocated link is never reclaimed by a stale scan.

        A missing record with a leftover index entry counts as reclaimable.

        Returns:
            bool:
                True if the record or its index entry was removed by this call.

        Example:
            >>> dao.delete_expired('otter', datetime.now(UTC))
            True
        """
        link_key = self.keys.link_key(word)
        index_key = self.keys.link_expiry_index_key()

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                expires_at = pipe.hget(link_key, 'expires_at')
                if expires_at is not None and not now > from_timestamp(expires_at):
                    pipe.unwatch()
                    return False

                pipe.multi()
                pipe.delete(link_key)
                pipe.zrem(index_key, word)
                deleted, unindexed = pipe.execute()
            except redis.exceptions.WatchError:
                logger.debug('Short link changed while being reclaimed, skipping.', extra={'word': word})
                return False

        return bool(deleted or unindexed)

    @handle_redis_errors
    @beartype
    def scan_expired(self, now: datetime, **kwargs) -> list[str]:
        """Return words whose indexed expiry is strictly before `now`, oldest first"""
        index_key = self.keys.link_expiry_index_key()
        return list(self.redis.zrangebyscore(index_key, '-inf', f'({to_timestamp(now)}'))

    @handle_redis_errors
    def active_words(self, **kwargs) -> list[str]:
        """Return every indexed word (used to rebuild the WordPool at startup)"""
        return list(self.redis.zrange(self.keys.link_expiry_index_key(), 0, -1))
