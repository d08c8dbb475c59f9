"""In-memory doubles of the mapping store and resolution cache.

Both honour their DAO contracts: the store rejects duplicate short codes
atomically and keeps the first mapping created for an original URL, the
cache records the TTL it was asked to apply.
"""

import threading

import pytest

from linkshortener.dao.base import UrlMappingBaseDAO, ResolutionCacheBaseDAO
from linkshortener.dao.exceptions import CacheUnavailableError, ShortCodeConflictError
from linkshortener.models import UrlMappingModel


class InMemoryUrlMappingDAO(UrlMappingBaseDAO):
    def __init__(self):
        self.records: dict[str, UrlMappingModel] = {}
        self.by_url: dict[str, str] = {}
        self.insert_calls = 0
        self._lock = threading.Lock()

    def find_by_original_url(self, original_url, **kwargs):
        shortcode = self.by_url.get(original_url)
        return None if shortcode is None else self.records[shortcode]

    def find_by_max_counter(self, **kwargs):
        with self._lock:
            return max(self.records.values(), key=lambda mapping: mapping.counter, default=None)

    def find_by_shortcode(self, shortcode, **kwargs):
        return self.records.get(shortcode)

    def insert(self, mapping, **kwargs):
        with self._lock:
            self.insert_calls += 1
            if mapping.shortcode in self.records:
                raise ShortCodeConflictError(f"Short URL with code '{mapping.shortcode}' already exists.")
            self.records[mapping.shortcode] = mapping
            self.by_url.setdefault(mapping.original_url, mapping.shortcode)
        return self


class InMemoryResolutionCache(ResolutionCacheBaseDAO):
    def __init__(self):
        self.entries: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, shortcode, **kwargs):
        return self.entries.get(shortcode)

    def set(self, shortcode, original_url, ttl=3600, **kwargs):
        if ttl <= 0:
            raise ValueError('ttl must be positive')
        self.entries[shortcode] = original_url
        self.ttls[shortcode] = ttl
        return self


class UnavailableResolutionCache(ResolutionCacheBaseDAO):
    def __init__(self):
        self.calls = 0

    def get(self, shortcode, **kwargs):
        self.calls += 1
        raise CacheUnavailableError("Can't connect to Redis at cache.test:6379/0.")

    def set(self, shortcode, original_url, ttl=3600, **kwargs):
        self.calls += 1
        raise CacheUnavailableError("Can't connect to Redis at cache.test:6379/0.")


@pytest.fixture
def store():
    return InMemoryUrlMappingDAO()


@pytest.fixture
def cache():
    return InMemoryResolutionCache()


@pytest.fixture
def unavailable_cache():
    return UnavailableResolutionCache()
