"""Shortening service: turn an original URL into a short URL.

Procedure:
    - Step 1: Validate the URL (http/https only)
    - Step 2: Return the existing short code if the URL was shortened before
    - Step 3: Allocate a counter and encode it into a short code
    - Step 4: Insert the mapping; on a short code conflict go back to Step 3
    - Step 5: Populate the resolution cache (best effort)
    - Step 6: Compose the short URL

Example:
    >>> service = ShorteningService(store, cache, base_url='https://sho.rt')
    >>> service.shorten('https://example.com/a').short_url
    'https://sho.rt/b'
    >>> service.shorten('https://example.com/a').created
    False
"""

import logging

from linkshortener.constants import TTL, Allocation
from linkshortener.dao.base import UrlMappingBaseDAO, ResolutionCacheBaseDAO
from linkshortener.dao.exceptions import DataStoreError, ShortCodeConflictError
from linkshortener.exceptions import AllocationExhaustedError, InvalidInputError, ServerError
from linkshortener.models import UrlMappingModel
from linkshortener.services import cache_aside
from linkshortener.services.results import CacheStatus, ShortenResult
from linkshortener.services.sequencer import AllocationSequencer
from linkshortener.utils.encoder import encode_counter
from linkshortener.utils.helpers import get_short_url
from linkshortener.utils.validators import is_valid_url


logger = logging.getLogger(__name__)


class ShorteningService:
    """Orchestrate dedup, allocation, persistence and cache population.

    Args:
        store (UrlMappingBaseDAO): Durable mapping store.
        cache (ResolutionCacheBaseDAO | None): Resolution cache, None to run store-only.
        base_url (str): Public base address short codes are appended to.
        cache_ttl (int): Lifetime of populated cache entries in seconds.
        max_attempts (int): Insert attempts before giving up on conflicts.
        sequencer (AllocationSequencer | None): Counter source. Defaults to one reading `store`.
    """

    def __init__(
        self,
        store: UrlMappingBaseDAO,
        cache: ResolutionCacheBaseDAO | None = None,
        *,
        base_url: str,
        cache_ttl: int = TTL.HOT,
        max_attempts: int = Allocation.MAX_ATTEMPTS,
        sequencer: AllocationSequencer | None = None,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1 (given value: {max_attempts}).')

        self.store = store
        self.cache = cache
        self.base_url = base_url
        self.cache_ttl = cache_ttl
        self.max_attempts = max_attempts
        self.sequencer = sequencer or AllocationSequencer(store)

    def shorten(self, original_url: str) -> ShortenResult:
        """Shorten `original_url`, reusing its existing short code if it has one.

        Raises:
            InvalidInputError: If the URL is not a well-formed http(s) URL.
            AllocationExhaustedError: If every insert attempt conflicted.
            ServerError: If the mapping store is unavailable.
        """
        if not is_valid_url(original_url):
            raise InvalidInputError('Invalid URL')

        try:
            existing = self.store.find_by_original_url(original_url)
        except DataStoreError as e:
            raise ServerError('Mapping store unavailable during dedup lookup.') from e

        if existing is not None:
            logger.debug('URL already shortened. Reusing short code.', extra={'shortcode': existing.shortcode})
            return ShortenResult(
                shortcode=existing.shortcode,
                short_url=get_short_url(existing.shortcode, self.base_url),
                created=False,
                cache_status=CacheStatus.SKIPPED,
            )

        mapping = self._allocate(original_url)
        cache_status = cache_aside.populate(self.cache, mapping.shortcode, mapping.original_url, self.cache_ttl)

        logger.info(
            'Created short URL mapping.',
            extra={'shortcode': mapping.shortcode, 'counter': mapping.counter, 'cacheStatus': str(cache_status)},
        )
        return ShortenResult(
            shortcode=mapping.shortcode,
            short_url=get_short_url(mapping.shortcode, self.base_url),
            created=True,
            cache_status=cache_status,
        )

    def _allocate(self, original_url: str) -> UrlMappingModel:
        """Insert a new mapping, re-reading the counter after every conflict."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                counter = self.sequencer.next_counter()
                mapping = UrlMappingModel(
                    original_url=original_url,
                    shortcode=encode_counter(counter),
                    counter=counter,
                )
                self.store.insert(mapping)
            except ShortCodeConflictError:
                logger.info(
                    'Short code allocation conflict. Retrying with a fresh counter.',
                    extra={'attempt': attempt, 'maxAttempts': self.max_attempts},
                )
                continue
            except DataStoreError as e:
                raise ServerError('Mapping store unavailable during allocation.') from e
            else:
                return mapping

        raise AllocationExhaustedError(f'Could not allocate a unique short code after {self.max_attempts} attempts.')
