from linkshortener.services.results import CacheStatus, ResolutionSource, ShortenResult, ResolveResult
from linkshortener.services.sequencer import AllocationSequencer
from linkshortener.services.shortening import ShorteningService
from linkshortener.services.redirect import RedirectService


__all__ = [
    'CacheStatus',
    'ResolutionSource',
    'ShortenResult',
    'ResolveResult',
    'AllocationSequencer',
    'ShorteningService',
    'RedirectService',
]
