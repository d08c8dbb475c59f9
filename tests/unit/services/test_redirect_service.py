"""Unit tests for RedirectService

Test coverage includes:

1. Cache hits
   - Served from the cache without reading the store.

2. Cache misses
   - Served from the store and repopulated with the configured TTL.

3. Degraded operation
   - A failing cache falls back to the store and is not written again.
   - Services without a cache resolve from the store.

4. Failures
   - Unknown and empty short codes raise NotFoundError.
   - Store outages raise ServerError.
"""

from unittest.mock import MagicMock

import pytest

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import NotFoundError, ServerError
from linkshortener.models import UrlMappingModel
from linkshortener.services import CacheStatus, RedirectService, ResolutionSource


@pytest.fixture
def mapping(store) -> UrlMappingModel:
    mapping = UrlMappingModel(original_url='https://example.com/a', shortcode='b', counter=1)
    store.insert(mapping)
    return mapping


@pytest.fixture
def service(store, cache) -> RedirectService:
    return RedirectService(store, cache, cache_ttl=600)


def test_cache_hit_skips_store(service, store, cache):
    cache.entries['b'] = 'https://example.com/a'
    store.find_by_shortcode = MagicMock()

    result = service.resolve('b')

    assert result.original_url == 'https://example.com/a'
    assert result.source is ResolutionSource.CACHE
    assert result.cache_status is CacheStatus.HIT
    store.find_by_shortcode.assert_not_called()


def test_cache_miss_reads_store_and_repopulates(service, cache, mapping):
    result = service.resolve('b')

    assert result.original_url == mapping.original_url
    assert result.source is ResolutionSource.STORE
    assert result.cache_status is CacheStatus.STORED
    assert cache.entries == {'b': 'https://example.com/a'}
    assert cache.ttls == {'b': 600}


def test_second_resolution_is_served_from_cache(service, mapping):
    service.resolve('b')
    assert service.resolve('b').source is ResolutionSource.CACHE


def test_cache_outage_falls_back_to_store(store, unavailable_cache, mapping):
    result = RedirectService(store, unavailable_cache).resolve('b')

    assert result.original_url == 'https://example.com/a'
    assert result.cache_status is CacheStatus.FAILED
    assert unavailable_cache.calls == 1


def test_resolution_without_cache(store, mapping):
    result = RedirectService(store).resolve('b')

    assert result.source is ResolutionSource.STORE
    assert result.cache_status is CacheStatus.SKIPPED


@pytest.mark.parametrize('shortcode', ['zz', '', None])
def test_unknown_short_code(service, cache, shortcode):
    with pytest.raises(NotFoundError, match='URL not found'):
        service.resolve(shortcode)
    assert cache.entries == {}


def test_store_outage_raises_server_error(service, store):
    store.find_by_shortcode = MagicMock(side_effect=DataStoreError("Can't connect to Redis at store.test:6379/0."))

    with pytest.raises(ServerError):
        service.resolve('b')
