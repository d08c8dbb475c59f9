from dataclasses import dataclass, field
from datetime import datetime, UTC


@dataclass(frozen=True)
class UrlMappingModel:
    """Represent a durable long URL to short code mapping.

    Attributes:
        original_url (str):
            The full target URL the short code redirects to.
        shortcode (str):
            Unique short identifier, derived from `counter`.
        counter (int):
            Allocated integer the short code was encoded from.
        created_at (datetime):
            Creation time in UTC. Defaults to now.

    Example:
        >>> mapping = UrlMappingModel(
        ...     original_url="https://example.com/article/123",
        ...     shortcode="b",
        ...     counter=1,
        ... )
        >>> mapping.shortcode
        'b'
        >>> mapping.created_at.tzinfo
        datetime.timezone.utc
    """

    original_url: str
    shortcode: str
    counter: int
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
