"""Construction of the store and cache DAOs from application settings."""

import logging

from linkshortener.dao.cache import ResolutionCacheDAO
from linkshortener.dao.exceptions import CacheUnavailableError
from linkshortener.utils.config import AppSettings


logger = logging.getLogger(__name__)

CACHE_UNAVAILABLE = 'CACHE_UNAVAILABLE'


def connect_cache(settings: AppSettings, prefix: str | None) -> ResolutionCacheDAO | None:
    """Connect to the resolution cache, or return None to run store-only.

    A cache that can't be reached at connect time is logged and skipped for
    this invocation rather than failing the request.
    """
    cache_kwargs = settings.cache_kwargs()
    if cache_kwargs is None:
        logger.debug('No resolution cache configured. Running store-only.')
        return None

    try:
        return ResolutionCacheDAO(**cache_kwargs, prefix=prefix)
    except CacheUnavailableError:
        logger.warning(
            'Resolution cache unavailable. Running store-only.',
            exc_info=True,
            extra={'event': CACHE_UNAVAILABLE},
        )
        return None
