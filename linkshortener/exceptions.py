"""Application-level exceptions.

Only `InvalidInputError`, `NotFoundError` and `ServerError` (and its
subclasses) are expected to reach the HTTP boundary. Configuration errors
are raised during process startup and surface as generic server errors.
"""


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class InvalidInputError(LinkShortenerError):
    """Raised when a client supplies a malformed URL."""

    error_code = 'app:invalid_input_error'


class NotFoundError(LinkShortenerError):
    """Raised when a short code has no mapping."""

    error_code = 'app:not_found_error'


class ServerError(LinkShortenerError):
    """Raised when a request cannot be served because of a server-side failure."""

    error_code = 'app:server_error'


class AllocationExhaustedError(ServerError):
    """Raised when every short code allocation attempt hit a uniqueness conflict."""

    error_code = 'app:allocation_exhausted_error'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
