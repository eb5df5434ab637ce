"""Unit tests for Redis DAO helpers.

Test coverage includes:
    1. handle_redis_errors
       - Ensures the wrapped method executes and returns its result.
       - Ensures Redis connection errors are converted into DataStoreError.
       - Ensures any other Redis error is converted into DataStoreError.
       - Confirms functools.wraps preserves the original function's name and docstring.
    2. Timestamp conversion
       - Ensures aware datetimes survive a round trip through Redis scores.
"""

from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest
import redis

from wordshortener.dao.exceptions import DataStoreError
from wordshortener.dao.redis.helpers import from_timestamp, handle_redis_errors, to_timestamp


class DummyDAO:
    def __init__(self):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }

    @handle_redis_errors
    def ping(self):
        """Ping Redis."""
        return 'OK'

    @handle_redis_errors
    def disconnected(self):
        raise redis.exceptions.ConnectionError('Cannot connect')

    @handle_redis_errors
    def out_of_memory(self):
        raise redis.exceptions.ResponseError('OOM command not allowed')


# -------------------------------
# 1. handle_redis_errors
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


def test_decorator_transforms_redis_connection_error():
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0."):
        DummyDAO().disconnected()


def test_decorator_transforms_other_redis_errors():
    with pytest.raises(DataStoreError, match=r'Redis error in out_of_memory\(\): OOM command not allowed'):
        DummyDAO().out_of_memory()


def test_decorator_preserves_metadata():
    assert DummyDAO.ping.__name__ == 'ping'
    assert DummyDAO.ping.__doc__ == 'Ping Redis.'


# -------------------------------
# 2. Timestamp conversion
# -------------------------------


@pytest.mark.parametrize('encode', [lambda ts: ts, str, lambda ts: str(ts).encode()])
def test_timestamp_round_trip(encode):
    moment = datetime(2026, 10, 17, 12, 30, 15, 250000, tzinfo=UTC)

    restored = from_timestamp(encode(to_timestamp(moment)))

    assert restored == moment
    assert restored.tzinfo is UTC
