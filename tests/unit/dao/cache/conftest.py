import json
from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def cache_client() -> redis.Redis:
    """Mock a Redis client serving the resolution cache."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'cache.test', 'port': 6379, 'db': 0},
    )
    client.get.return_value = None
    return client


@pytest.fixture
def secrets_client():
    """Mock a Secrets Manager client holding cache credentials."""
    client = MagicMock()
    client.get_secret_value.return_value = {'SecretString': json.dumps({'username': 'default', 'password': 'token123'})}
    return client
