"""Abstract base class for UrlMapping data access objects (DAOs).

This class establishes a consistent contract for all mapping store
implementations, regardless of the underlying storage mechanism
(e.g., Redis, DynamoDB, PostgreSQL).

Responsibilities:
    - Provide lookups by original URL, by short code and by highest counter.
    - Insert new mappings while enforcing short code uniqueness.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import UrlMappingModel
        >>> from linkshortener.dao.redis import UrlMappingRedisDAO

        >>> dao = UrlMappingRedisDAO(...)
        >>> dao.insert(UrlMappingModel(original_url="https://example.com/a", shortcode="b", counter=1))

        >>> dao.find_by_shortcode("b").original_url
        'https://example.com/a'
        >>> dao.find_by_max_counter().counter
        1
"""

from abc import ABC, abstractmethod

from linkshortener.models import UrlMappingModel


class UrlMappingBaseDAO(ABC):
    """Interface for the durable mapping store.

    Methods:
        find_by_original_url(original_url: str, **kwargs) -> UrlMappingModel | None:
            Return a mapping created for this exact URL, if any.

        find_by_max_counter(**kwargs) -> UrlMappingModel | None:
            Return the mapping holding the highest counter, if any.

        find_by_shortcode(shortcode: str, **kwargs) -> UrlMappingModel | None:
            Return the mapping for this short code, if any.

        insert(mapping: UrlMappingModel, **kwargs) -> UrlMappingBaseDAO:
            Persist a new mapping.
            Raises ShortCodeConflictError if the short code already exists.

    Every method raises DataStoreError on connection or I/O failure.

    NOTE:
        - Mappings are immutable and never expire. The DAO provides no
          update or delete operations.
        - Original URLs are not a uniqueness constraint; deduplication is
          the caller's responsibility.
    """

    @abstractmethod
    def find_by_original_url(self, original_url: str, **kwargs) -> UrlMappingModel | None:
        """Retrieve a mapping by its original URL.

        Args:
            original_url (str):
                The full target URL, matched exactly.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlMappingModel | None: The mapping if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_max_counter(self, **kwargs) -> UrlMappingModel | None:
        """Retrieve the mapping with the highest allocated counter.

        Returns:
            UrlMappingModel | None: The latest mapping, or None if the store is empty.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_shortcode(self, shortcode: str, **kwargs) -> UrlMappingModel | None:
        """Retrieve a mapping by its short code.

        Args:
            shortcode (str):
                The short code, matched exactly.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlMappingModel | None: The mapping if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, mapping: UrlMappingModel, **kwargs) -> 'UrlMappingBaseDAO':
        """Insert a new mapping into the data store.

        A conflicting write must fail; it never overwrites the existing record.

        Args:
            mapping (UrlMappingModel):
                The mapping to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlMappingBaseDAO: self (for method chaining)

        Raises:
            ShortCodeConflictError:
                If a mapping with the same short code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
