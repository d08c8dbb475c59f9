"""Best-effort resolution cache access shared by both services.

Cache failures never propagate from here: they are logged and reported
through the returned CacheStatus.
"""

import logging

from linkshortener.dao.base import ResolutionCacheBaseDAO
from linkshortener.dao.exceptions import CacheUnavailableError
from linkshortener.services.results import CacheStatus


logger = logging.getLogger(__name__)


def read_through(cache: ResolutionCacheBaseDAO | None, shortcode: str) -> tuple[str | None, CacheStatus]:
    """Look a short code up in the cache.

    Returns:
        (original_url, HIT) on a hit, (None, MISS) on a miss,
        (None, FAILED) if the cache is down, (None, SKIPPED) without a cache.
    """
    if cache is None:
        return None, CacheStatus.SKIPPED

    try:
        original_url = cache.get(shortcode)
    except CacheUnavailableError:
        logger.warning('Resolution cache read failed. Falling back to the store.', exc_info=True, extra={'shortcode': shortcode})
        return None, CacheStatus.FAILED

    if original_url is None:
        return None, CacheStatus.MISS
    return original_url, CacheStatus.HIT


def populate(cache: ResolutionCacheBaseDAO | None, shortcode: str, original_url: str, ttl: int) -> CacheStatus:
    """Cache a resolution for `ttl` seconds.

    Returns:
        STORED on success, FAILED if the cache is down, SKIPPED without a cache.
    """
    if cache is None:
        return CacheStatus.SKIPPED

    try:
        cache.set(shortcode, original_url, ttl=ttl)
    except CacheUnavailableError:
        logger.warning('Resolution cache write failed. Continuing without cache.', exc_info=True, extra={'shortcode': shortcode})
        return CacheStatus.FAILED
    return CacheStatus.STORED
