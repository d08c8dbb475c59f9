"""Data Access Object (DAO) implementation for managing URL mappings in Redis

This module provides a Redis-based implementation of UrlMappingBaseDAO.

Data layout (see RedisKeySchema):
    links:{shortcode}           hash: original_url, shortcode, counter, created_at
    links:counters              sorted set: member=shortcode, score=counter
    links:url:{xxh3_128(url)}   shortcode of the first mapping created for url

Mappings never expire and are never modified once written.

Classes:
    UrlMappingRedisDAO:
        DAO for storing and retrieving UrlMappingModel in a Redis datastore.

Example:
    >>> from linkshortener.models import UrlMappingModel
    >>> from linkshortener.dao.redis import UrlMappingRedisDAO

    >>> dao = UrlMappingRedisDAO(prefix="app:dev")
    >>> dao.insert(UrlMappingModel(original_url="https://example.com/page", shortcode="b", counter=1))
    <UrlMappingRedisDAO>

    >>> dao.find_by_shortcode("b").original_url
    'https://example.com/page'
    >>> dao.find_by_original_url("https://example.com/page").shortcode
    'b'
    >>> dao.find_by_max_counter().counter
    1
"""

from datetime import datetime

import redis
from beartype import beartype

from linkshortener.models import UrlMappingModel
from linkshortener.dao.base import UrlMappingBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import ShortCodeConflictError


class UrlMappingRedisDAO(RedisClientMixin, UrlMappingBaseDAO):
    """Redis-based Data Access Object (DAO) for URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(mapping: UrlMappingModel, **kwargs) -> UrlMappingRedisDAO:
            Atomically store the mapping and its counter/URL index entries.
            Raises ShortCodeConflictError when the shortcode is taken, including
            when a concurrent writer claims it mid-transaction.

        find_by_shortcode(shortcode: str, **kwargs) -> UrlMappingModel | None
        find_by_original_url(original_url: str, **kwargs) -> UrlMappingModel | None
        find_by_max_counter(**kwargs) -> UrlMappingModel | None

    Every method raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, mapping: UrlMappingModel, **kwargs) -> 'UrlMappingRedisDAO':
        """Insert a URL mapping into Redis

        The mapping key is WATCHed, checked for existence, and written in a
        MULTI/EXEC transaction together with its index entries. If another
        client writes the same key between WATCH and EXEC, the transaction
        aborts and the insert is reported as a conflict, never as an overwrite.

        Args:
            mapping (UrlMappingModel):
                The mapping to persist.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlMappingRedisDAO: self (for method chaining)

        Raises:
            ShortCodeConflictError:
                If a mapping with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        mapping_key = self.keys.mapping_key(mapping.shortcode)
        original_url_key = self.keys.original_url_key(mapping.original_url)
        counters_key = self.keys.counters_key()

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(mapping_key)
                if pipe.exists(mapping_key):
                    raise ShortCodeConflictError(f"Short URL with code '{mapping.shortcode}' already exists.")

                pipe.multi()
                pipe.hset(mapping_key, mapping=self._serialize(mapping))
                pipe.zadd(counters_key, {mapping.shortcode: mapping.counter})
                # The URL index keeps pointing at the first mapping created for a URL
                pipe.set(original_url_key, mapping.shortcode, nx=True)
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ShortCodeConflictError(f"Short URL with code '{mapping.shortcode}' was created concurrently.") from e
        return self

    @handle_redis_connection_error
    @beartype
    def find_by_shortcode(self, shortcode: str, **kwargs) -> UrlMappingModel | None:
        """Retrieve a stored mapping by shortcode

        Example:
            >>> dao.find_by_shortcode('b')
            UrlMappingModel(original_url='https://example.com', shortcode='b', counter=1, ...)
            >>> dao.find_by_shortcode('missing') is None
            True
        """
        data = self.redis.hgetall(self.keys.mapping_key(shortcode))
        if not data:
            return None
        return self._deserialize(data)

    @handle_redis_connection_error
    @beartype
    def find_by_original_url(self, original_url: str, **kwargs) -> UrlMappingModel | None:
        """Retrieve the first mapping created for an original URL

        The URL index is keyed by a hash of the URL, so the referenced
        record is compared against `original_url` before it is returned.
        """
        shortcode = self.redis.get(self.keys.original_url_key(original_url))
        if shortcode is None:
            return None

        mapping = self.find_by_shortcode(shortcode)
        if mapping is None or mapping.original_url != original_url:
            return None
        return mapping

    @handle_redis_connection_error
    @beartype
    def find_by_max_counter(self, **kwargs) -> UrlMappingModel | None:
        """Retrieve the mapping holding the highest counter

        Example:
            >>> dao.find_by_max_counter().counter
            124
        """
        latest = self.redis.zrevrange(self.keys.counters_key(), 0, 0)
        if not latest:
            return None
        return self.find_by_shortcode(latest[0])

    @staticmethod
    def _serialize(mapping: UrlMappingModel) -> dict[str, str]:
        return {
            'original_url': mapping.original_url,
            'shortcode': mapping.shortcode,
            'counter': str(mapping.counter),
            'created_at': mapping.created_at.isoformat(),
        }

    @staticmethod
    def _deserialize(data: dict[str, str]) -> UrlMappingModel:
        return UrlMappingModel(
            original_url=data['original_url'],
            shortcode=data['shortcode'],
            counter=int(data['counter']),
            created_at=datetime.fromisoformat(data['created_at']),
        )
