"""Unit tests for UrlMappingRedisDAO

Test coverage includes:

1. Insert
   - Writes the mapping hash, counter index and URL index in one transaction.
   - Raises ShortCodeConflictError when the shortcode exists or is claimed concurrently.

2. Lookups
   - find_by_shortcode, find_by_original_url and find_by_max_counter return
     models for stored data and None otherwise.
   - Hash collisions in the URL index never return a foreign mapping.

3. Error handling
   - Connectivity issues raise DataStoreError.
   - Wrong argument types are rejected by beartype.
"""

from datetime import datetime, UTC

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from linkshortener.models import UrlMappingModel
from linkshortener.dao.redis import UrlMappingRedisDAO
from linkshortener.dao.exceptions import DataStoreError, ShortCodeConflictError


CREATED_AT = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture
def dao(redis_client, app_prefix) -> UrlMappingRedisDAO:
    return UrlMappingRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def mapping() -> UrlMappingModel:
    return UrlMappingModel(original_url='https://example.com/a', shortcode='b', counter=1, created_at=CREATED_AT)


@pytest.fixture
def stored_hash() -> dict[str, str]:
    return {
        'original_url': 'https://example.com/a',
        'shortcode': 'b',
        'counter': '1',
        'created_at': CREATED_AT.isoformat(),
    }


# -------------------------------
# 1. Insert
# -------------------------------


def test_insert_writes_mapping_and_indexes(dao, redis_client, mapping, stored_hash):
    assert dao.insert(mapping) is dao

    url_key = dao.keys.original_url_key('https://example.com/a')
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.watch.assert_called_once_with('testapp:test:links:b')
    redis_client.multi.assert_called_once_with()
    redis_client.hset.assert_called_once_with('testapp:test:links:b', mapping=stored_hash)
    redis_client.zadd.assert_called_once_with('testapp:test:links:counters', {'b': 1})
    redis_client.set.assert_called_once_with(url_key, 'b', nx=True)
    redis_client.execute.assert_called_once_with()


def test_insert_existing_shortcode_raises_conflict(dao, redis_client, mapping):
    redis_client.exists.return_value = True

    with pytest.raises(ShortCodeConflictError, match="'b' already exists"):
        dao.insert(mapping)

    redis_client.multi.assert_not_called()
    redis_client.execute.assert_not_called()


def test_insert_concurrent_write_raises_conflict(dao, redis_client, mapping):
    redis_client.execute.side_effect = redis.exceptions.WatchError('Watched variable changed.')

    with pytest.raises(ShortCodeConflictError, match='created concurrently'):
        dao.insert(mapping)


def test_insert_connection_error(dao, redis_client, mapping):
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.insert(mapping)


def test_insert_rejects_non_model_argument(dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.insert({'shortcode': 'b'})


# -------------------------------
# 2. Lookups
# -------------------------------


def test_find_by_shortcode(dao, redis_client, mapping, stored_hash):
    redis_client.hgetall.return_value = stored_hash

    assert dao.find_by_shortcode('b') == mapping
    redis_client.hgetall.assert_called_once_with('testapp:test:links:b')


def test_find_by_shortcode_missing(dao, redis_client):
    assert dao.find_by_shortcode('zz') is None


def test_find_by_original_url(dao, redis_client, mapping, stored_hash):
    redis_client.get.return_value = 'b'
    redis_client.hgetall.return_value = stored_hash

    assert dao.find_by_original_url('https://example.com/a') == mapping
    redis_client.get.assert_called_once_with(dao.keys.original_url_key('https://example.com/a'))


def test_find_by_original_url_missing(dao, redis_client):
    assert dao.find_by_original_url('https://example.com/a') is None
    redis_client.hgetall.assert_not_called()


def test_find_by_original_url_ignores_foreign_mapping(dao, redis_client, stored_hash):
    redis_client.get.return_value = 'b'
    redis_client.hgetall.return_value = stored_hash

    assert dao.find_by_original_url('https://example.com/other') is None


def test_find_by_max_counter(dao, redis_client, mapping, stored_hash):
    redis_client.zrevrange.return_value = ['b']
    redis_client.hgetall.return_value = stored_hash

    assert dao.find_by_max_counter() == mapping
    redis_client.zrevrange.assert_called_once_with('testapp:test:links:counters', 0, 0)


def test_find_by_max_counter_empty_store(dao, redis_client):
    assert dao.find_by_max_counter() is None


# -------------------------------
# 3. Error handling
# -------------------------------


@pytest.mark.parametrize(
    'method, args, command',
    [
        ('find_by_shortcode', ('b',), 'hgetall'),
        ('find_by_original_url', ('https://example.com/a',), 'get'),
        ('find_by_max_counter', (), 'zrevrange'),
    ],
)
def test_lookups_raise_data_store_error(dao, redis_client, method, args, command):
    getattr(redis_client, command).side_effect = redis.exceptions.TimeoutError('Timeout reading from socket')

    with pytest.raises(DataStoreError):
        getattr(dao, method)(*args)


def test_find_by_shortcode_rejects_non_string(dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.find_by_shortcode(123)


def test_init_healthcheck_failure(redis_client, app_prefix):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(DataStoreError, match='redis.test:6379/0'):
        UrlMappingRedisDAO(redis_client=redis_client, prefix=app_prefix)
