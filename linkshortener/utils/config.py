"""Utility functions for application configuration management.

Configuration is a single JSON document stored in **AWS AppConfig**. Each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
shared AppConfig *Application*. Both lambdas read the same document:

    {
        "build": 1,
        "base_url": "https://sho.rt",
        "cache_ttl": 3600,
        "max_allocation_attempts": 5,
        "store": {"host": "...", "port": 6379, "db": 0},
        "cache": {"host": "...", "port": 6379, "db": 0, "secret": "linkshortener/dev/cache"}
    }

`store` holds the Redis connection parameters of the mapping store, `cache`
those of the resolution cache. `cache` is optional; without it the lambdas
run store-only.

The document is read once per process (`load_settings()` is memoized) and
treated as immutable afterwards.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> dict
        Fetch the raw configuration document from AWS AppConfig (or from a
        local AppConfig agent when running under SAM).

    load_settings() -> AppSettings
        Parse and validate the configuration document, once per process.
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Any
from collections.abc import Callable

import boto3

from linkshortener.constants import ENV, TTL, Allocation
from linkshortener.exceptions import BadConfigurationError
from linkshortener.types import AppConfigDocument, RedisConfig
from linkshortener.utils.helpers import require_environment
from linkshortener.utils.runtime import running_locally
from linkshortener.utils.validators import is_valid_url


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class AppSettings:
    """Validated, immutable view of the configuration document.

    Attributes:
        store (dict):
            Redis connection parameters of the mapping store.
        cache (dict | None):
            Redis connection parameters of the resolution cache. None disables caching.
        base_url (str | None):
            Public base address used to compose short URLs. None means
            "derive it from the incoming request".
        cache_ttl (int):
            Lifetime of resolution cache entries in seconds.
        max_allocation_attempts (int):
            Insert attempts before short code allocation gives up.
        build (Any):
            Build marker of the configuration document, for logging only.
    """

    store: RedisConfig
    cache: RedisConfig | None = None
    base_url: str | None = None
    cache_ttl: int = TTL.HOT
    max_allocation_attempts: int = Allocation.MAX_ATTEMPTS
    build: Any = field(default=None, compare=False)

    @classmethod
    def from_document(cls, document: AppConfigDocument) -> 'AppSettings':
        """Build settings from a raw configuration document.

        Raises:
            BadConfigurationError: If any value is missing or malformed.
        """
        if not isinstance(document, dict):
            raise BadConfigurationError(f'Configuration document must be a JSON object (given type: {type(document)}).')

        store = document.get('store')
        if not isinstance(store, dict) or not store.get('host'):
            raise BadConfigurationError("Configuration requires a 'store' section with at least a 'host'.")

        cache = document.get('cache')
        if cache is not None and (not isinstance(cache, dict) or not cache.get('host')):
            raise BadConfigurationError("Optional 'cache' section must be an object with at least a 'host'.")

        base = document.get('base_url')
        if base is not None and not is_valid_url(base):
            raise BadConfigurationError(f"'base_url' must be an http(s) URL (given value: {base!r}).")

        cache_ttl = document.get('cache_ttl', TTL.HOT)
        if isinstance(cache_ttl, bool) or not isinstance(cache_ttl, int) or cache_ttl <= 0:
            raise BadConfigurationError(f"'cache_ttl' must be a positive integer (given value: {cache_ttl!r}).")

        attempts = document.get('max_allocation_attempts', Allocation.MAX_ATTEMPTS)
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise BadConfigurationError(f"'max_allocation_attempts' must be an integer >= 1 (given value: {attempts!r}).")

        return cls(
            store=dict(store),
            cache=dict(cache) if cache is not None else None,
            base_url=base,
            cache_ttl=cache_ttl,
            max_allocation_attempts=attempts,
            build=document.get('build'),
        )

    def store_kwargs(self) -> dict[str, Any]:
        """Mapping store parameters as UrlMappingRedisDAO keyword arguments."""
        return {f'redis_{k}': v for k, v in self.store.items()}

    def cache_kwargs(self) -> dict[str, Any] | None:
        """Cache parameters as ResolutionCacheDAO keyword arguments, or None if caching is disabled."""
        if self.cache is None:
            return None
        return {f'cache_{k}': v for k, v in self.cache.items()}


def _sam_load_local_appconfig(func: Callable[[], dict]) -> Callable[[], dict]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     – Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  – Optional profile name (default: "backend-config").
    """

    def _validate_agent_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url.rstrip('/')

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> dict:
        if not running_locally():
            return func(*args, **kwargs)
        agent_url = _validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not agent_url:
            return func(*args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'build': document.get('build')})
        return document

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config() -> AppConfigDocument:
    """Load the configuration document from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Returns:
        dict: The raw configuration document.

    Raises:
        MissingEnvironmentVariableError: If any AppConfig identifier is not set.
        botocore.exceptions.ClientError: On AppConfig API failures.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': document.get('build')})
    return document


@functools.cache
def load_settings() -> AppSettings:
    """Load and validate application settings once per process.

    Failed loads are not memoized, so the next invocation retries.

    Example:
        >>> settings = load_settings()
        >>> settings.cache_ttl
        3600
    """
    settings = AppSettings.from_document(load_config())
    logger.info('Application settings loaded.', extra={'build': settings.build, 'cacheEnabled': settings.cache is not None})
    return settings
