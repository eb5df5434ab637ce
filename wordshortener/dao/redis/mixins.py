"""Shared Redis client wiring for the short link and message DAOs.

Both DAOs of one application run on a single client so they share its
connection pool; the first DAO creates it from the REDIS_* settings and
the second is handed `redis_client=`.

Classes:
    - RedisClientMixin: builds or adopts the client, sets up the key schema
      and fails fast when Redis can't be reached.

Example:
        >>> links = ShortLinkRedisDAO(redis_host='localhost', redis_socket_timeout=5, prefix='wordshortener:prod')
        >>> messages = MessageRedisDAO(redis_client=links.redis, prefix='wordshortener:prod')
"""

from typing import Optional

import redis

from wordshortener.dao.redis.redis_key_schema import RedisKeySchema
from wordshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Redis client and key schema for the Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Client used for every store call, created with a socket timeout
            so a stalled server surfaces as a DataStoreError.

        keys (RedisKeySchema):
            Key names under the application prefix.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Adopt `redis_client`, or connect with the redis_* parameters when it is None

        Raises:
            DataStoreError:
                If Redis does not answer the startup PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING Redis; raise DataStoreError naming the server if it doesn't answer"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            raise DataStoreError(
                f"Can't connect to Redis at {info.get('host')}:{info.get('port')}/{info.get('db')}. "
                'Check the provided configuration parameters.'
            ) from e
