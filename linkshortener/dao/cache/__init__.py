from linkshortener.dao.cache.cache_key_schema import CacheKeySchema
from linkshortener.dao.cache.mixins import CacheClientMixin
from linkshortener.dao.cache.resolution_cache_dao import ResolutionCacheDAO

__all__ = [
    'CacheKeySchema',
    'CacheClientMixin',
    'ResolutionCacheDAO',
]
