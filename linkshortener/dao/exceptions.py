"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortCodeConflictError:
        Raised when inserting a UrlMappingModel whose short code is already taken.

    DataStoreError:
        Raised when the mapping store is unreachable (connection issues, timeouts, etc.).

    CacheUnavailableError:
        Raised when the resolution cache cannot be reached or written to.

Example:
    >>> from linkshortener.dao.exceptions import ShortCodeConflictError
    >>> raise ShortCodeConflictError("Short code 'b' already exists.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.ShortCodeConflictError: Short code 'b' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortCodeConflictError(DAOError):
    """Exception raised when a mapping with the same short code already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass


class CacheUnavailableError(DAOError):
    """Exception raised when the resolution cache cannot serve a request.

    Never fatal: callers fall back to the data store.
    """

    pass
