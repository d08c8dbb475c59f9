"""Redirect service: resolve a short code to its original URL (cache-aside)."""

import logging

from linkshortener.constants import TTL
from linkshortener.dao.base import UrlMappingBaseDAO, ResolutionCacheBaseDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import NotFoundError, ServerError
from linkshortener.services import cache_aside
from linkshortener.services.results import CacheStatus, ResolutionSource, ResolveResult


logger = logging.getLogger(__name__)


class RedirectService:
    """Resolve short codes from the cache, falling back to the store on a miss.

    Args:
        store (UrlMappingBaseDAO): Durable mapping store.
        cache (ResolutionCacheBaseDAO | None): Resolution cache, None to run store-only.
        cache_ttl (int): Lifetime of repopulated cache entries in seconds.
    """

    def __init__(
        self,
        store: UrlMappingBaseDAO,
        cache: ResolutionCacheBaseDAO | None = None,
        *,
        cache_ttl: int = TTL.HOT,
    ):
        self.store = store
        self.cache = cache
        self.cache_ttl = cache_ttl

    def resolve(self, shortcode: str) -> ResolveResult:
        """Return the original URL behind `shortcode`.

        Raises:
            NotFoundError: If the short code is empty or unknown.
            ServerError: If the mapping store is unavailable on a cache miss.
        """
        if not shortcode:
            raise NotFoundError('URL not found')

        original_url, cache_status = cache_aside.read_through(self.cache, shortcode)
        if cache_status is CacheStatus.HIT:
            return ResolveResult(
                shortcode=shortcode,
                original_url=original_url,
                source=ResolutionSource.CACHE,
                cache_status=CacheStatus.HIT,
            )

        try:
            mapping = self.store.find_by_shortcode(shortcode)
        except DataStoreError as e:
            raise ServerError('Mapping store unavailable during short code lookup.') from e

        if mapping is None:
            raise NotFoundError('URL not found')

        if cache_status is CacheStatus.FAILED:
            # Don't pay for a second round trip to a cache that just failed
            populated = CacheStatus.FAILED
        else:
            populated = cache_aside.populate(self.cache, shortcode, mapping.original_url, self.cache_ttl)

        logger.debug('Resolved short code from store.', extra={'shortcode': shortcode, 'cacheStatus': str(populated)})
        return ResolveResult(
            shortcode=shortcode,
            original_url=mapping.original_url,
            source=ResolutionSource.STORE,
            cache_status=populated,
        )
