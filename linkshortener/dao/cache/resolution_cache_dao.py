"""Redis-backed resolution cache (shortcode -> original URL).

Entries expire after a fixed TTL counted from population time. Every
Redis error, whether the server is unreachable or rejects the command
(READONLY after a failover, OOM, WRONGTYPE), is raised as
CacheUnavailableError so callers can degrade to store-only operation.

Example:
    >>> dao = ResolutionCacheDAO(cache_host='cache.internal', prefix='linkshortener:dev')
    >>> dao.set('b', 'https://example.com/a', ttl=3600)
    <ResolutionCacheDAO>
    >>> dao.get('b')
    'https://example.com/a'
    >>> dao.get('unknown') is None
    True
"""

from beartype import beartype

from linkshortener.constants import TTL
from linkshortener.dao.base import ResolutionCacheBaseDAO
from linkshortener.dao.cache.mixins import CacheClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error


class ResolutionCacheDAO(CacheClientMixin, ResolutionCacheBaseDAO):
    """Cache short code resolutions in Redis with a fixed TTL."""

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> str | None:
        return self.redis.get(self.keys.resolution_key(shortcode))

    @handle_redis_connection_error
    @beartype
    def set(self, shortcode: str, original_url: str, ttl: int = TTL.HOT, **kwargs) -> 'ResolutionCacheDAO':
        if ttl <= 0:
            raise ValueError(f'Cache TTL must be a positive number of seconds (given value: {ttl}).')

        self.redis.set(self.keys.resolution_key(shortcode), original_url, ex=ttl)
        return self
