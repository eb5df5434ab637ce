"""Fixtures shared by the Redis DAO tests.

The DAOs issue writes through `with self.redis.pipeline(...) as pipe:` and reads
straight on the client, so one mock plays both roles: `pipeline()` and
`__enter__` hand back the same object. Assertions can then target a single
mock whatever path a call took.
"""

from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def key_prefix() -> str:
    """Namespace every DAO under test writes to, as <app name>:<app env>."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock client answering both direct commands and its own transaction pipeline."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client
