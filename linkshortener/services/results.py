from dataclasses import dataclass
from enum import StrEnum


class CacheStatus(StrEnum):
    """Outcome of the resolution cache step of a request."""

    HIT = 'hit'
    MISS = 'miss'
    STORED = 'stored'
    FAILED = 'failed'  # cache unreachable, request served from the store
    SKIPPED = 'skipped'  # no cache configured, or the step does not touch the cache


class ResolutionSource(StrEnum):
    CACHE = 'cache'
    STORE = 'store'


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of ShorteningService.shorten().

    Attributes:
        shortcode (str): Short code mapped to the original URL.
        short_url (str): Base address joined with the short code.
        created (bool): False when an existing mapping was returned.
        cache_status (CacheStatus): STORED, FAILED or SKIPPED.
    """

    shortcode: str
    short_url: str
    created: bool
    cache_status: CacheStatus


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of RedirectService.resolve().

    Attributes:
        shortcode (str): The requested short code.
        original_url (str): Redirect target.
        source (ResolutionSource): Where the target was read from.
        cache_status (CacheStatus): HIT on cache reads; STORED, FAILED or SKIPPED after a store read.
    """

    shortcode: str
    original_url: str
    source: ResolutionSource
    cache_status: CacheStatus
