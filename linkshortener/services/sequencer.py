"""Counter allocation backed by the mapping store.

The next counter is one past the highest counter currently stored. Reading
the maximum and writing the new mapping are separate I/O calls, so two
concurrent allocations can compute the same counter. The store rejects the
second write with ShortCodeConflictError and ShorteningService retries with
a fresh read; this module does not lock anything.
"""

from linkshortener.constants import Allocation
from linkshortener.dao.base import UrlMappingBaseDAO


class AllocationSequencer:
    """Produce the next counter for a new mapping.

    Example:
        >>> sequencer = AllocationSequencer(store)
        >>> sequencer.next_counter()  # empty store
        1
    """

    def __init__(self, store: UrlMappingBaseDAO):
        self.store = store

    def next_counter(self) -> int:
        """Return the highest stored counter + 1, or 1 for an empty store.

        Raises:
            DataStoreError: If the store cannot be read.
        """
        latest = self.store.find_by_max_counter()
        if latest is None:
            return Allocation.FIRST_COUNTER
        return max(latest.counter + 1, Allocation.FIRST_COUNTER)
