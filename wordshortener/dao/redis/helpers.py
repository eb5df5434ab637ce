import functools
from datetime import datetime, UTC
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from wordshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate redis-py failures

    Connection errors keep the connection details in the message so they can be
    traced back to a misconfigured host. Any other RedisError (timeouts, OOM,
    script errors, ...) is reported with its own message.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_errors
        ... def get_count(self):
        ...     return self.redis.get('count')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis error in {method.__name__}(): {e}') from e

    return wrapper


def to_timestamp(moment: datetime) -> float:
    """Convert an aware datetime into a POSIX timestamp used as a Redis score"""
    return moment.timestamp()


def from_timestamp(value: str | bytes | float) -> datetime:
    """Convert a stored POSIX timestamp back into an aware UTC datetime"""
    if isinstance(value, bytes):
        value = value.decode()
    return datetime.fromtimestamp(float(value), tz=UTC)
