"""Abstract base class for the short code resolution cache.

The cache maps short codes to original URLs with a bounded lifetime. It is
never the source of truth: losing an entry only costs one store read.
"""

from abc import ABC, abstractmethod

from linkshortener.constants import TTL


class ResolutionCacheBaseDAO(ABC):
    """Interface for expiring shortcode -> original URL caches.

    Methods:
        get(shortcode: str, **kwargs) -> str | None:
            Return the cached original URL, or None on a miss.

        set(shortcode: str, original_url: str, ttl: int, **kwargs) -> ResolutionCacheBaseDAO:
            Cache the original URL for `ttl` seconds.

    Both methods raise CacheUnavailableError when the cache cannot be reached.
    """

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> str | None:
        """Look up the original URL cached for a short code.

        Raises:
            CacheUnavailableError: If the cache cannot be reached.
        """
        pass

    @abstractmethod
    def set(self, shortcode: str, original_url: str, ttl: int = TTL.HOT, **kwargs) -> 'ResolutionCacheBaseDAO':
        """Cache the original URL of a short code for `ttl` seconds.

        Raises:
            ValueError: If ttl is not a positive number of seconds.
            CacheUnavailableError: If the cache cannot be reached.
        """
        pass
