from linkshortener.dao.base.url_mapping_base_dao import UrlMappingBaseDAO
from linkshortener.dao.base.resolution_cache_base_dao import ResolutionCacheBaseDAO


__all__ = [
    'UrlMappingBaseDAO',
    'ResolutionCacheBaseDAO',
]
