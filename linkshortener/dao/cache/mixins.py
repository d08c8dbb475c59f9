"""Cache mixin providing resolution cache client initialization.

Responsibilities:
    - Initialize a Redis client for the resolution cache (TLS outside local runs).
    - Optionally resolve credentials from AWS Secrets Manager.
    - Delegate healthcheck to RedisClientMixin, reporting every Redis error
      (connection or command) as CacheUnavailableError instead of DataStoreError.

Classes:
    - CacheClientMixin: Base mixin to inject cache client setup (TLS + AUTH)
      and reuse RedisClientMixin's healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ResolutionCacheDAO(CacheClientMixin, ResolutionCacheBaseDAO):
        ...     pass
        ...
        >>> dao = ResolutionCacheDAO(cache_host="cache.internal", prefix="linkshortener:dev")
        >>> dao._healthcheck()
        True

Environment variables:
    - LOCALSTACK_ENDPOINT : LocalStack endpoint URL for local development
"""

import json
import os
from typing import Optional

import boto3
import redis
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.constants import ENV
from linkshortener.dao.cache.cache_key_schema import CacheKeySchema
from linkshortener.dao.exceptions import CacheUnavailableError
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.utils.runtime import running_locally


class CacheClientMixin(RedisClientMixin):
    """Mixin resolution cache client setup with TLS by default.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance.

        keys (CacheKeySchema):
            Helper class for generating namespaced cache key names.

    Args:
        cache_host (str): Hostname of the cache server.
        cache_port (int): Cache server port. Defaults to 6379.
        cache_db (int): Redis database index. Defaults to 0.
        cache_username (Optional[str]): Username for AUTH (if required).
        cache_password (Optional[str]): Password or AuthToken (if required).
        cache_secret (Optional[str]):
            Secrets Manager name holding {"username": "...", "password": "..."}.
            When set, its values take precedence over cache_username/cache_password.
        cache_ssl (Optional[bool]):
            Force TLS on or off. Defaults to TLS everywhere except local runs.
        cache_socket_timeout (float):
            Socket timeout in seconds. Kept short: a slow cache must not
            stall the request path.
        cache_client (Optional[redis.Redis]):
            Pre-initialized Redis client (useful in tests).
        prefix (Optional[str]):
            Namespace prefix for all cache keys, e.g. 'app:env'.
        secrets_client (Optional[BaseClient]):
            Optional boto3 Secrets Manager client to reuse (useful in tests).
        tls_verify (bool):
            If True, require certificate verification (ssl_cert_reqs='required').
        ca_bundle_path (Optional[str]):
            Optional path to a CA bundle file for certificate verification.

    Raises:
        CacheUnavailableError:
            If the secret cannot be resolved or the healthcheck fails.
    """

    connection_error = CacheUnavailableError
    # Any Redis failure, READONLY replicas and OOM included, degrades to store-only
    connectivity_errors = (redis.exceptions.RedisError,)

    def __init__(
        self,
        cache_host: Optional[str] = 'localhost',
        cache_port: Optional[int] = 6379,
        cache_db: Optional[int] = 0,
        cache_username: Optional[str] = None,
        cache_password: Optional[str] = None,
        cache_secret: Optional[str] = None,
        cache_ssl: Optional[bool] = None,
        cache_socket_timeout: float = 0.5,
        cache_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
        secrets_client: Optional[BaseClient] = None,
        tls_verify: bool = False,
        ca_bundle_path: Optional[str] = None,
    ):
        if cache_client is None:
            if cache_secret:
                secret_username, cache_password = self._resolve_secret(cache_secret, secrets_client)
                cache_username = secret_username or cache_username

            client_kwargs = dict(
                host=cache_host,
                port=int(cache_port),
                db=int(cache_db),
                username=cache_username,
                password=cache_password,
                decode_responses=True,
                socket_timeout=cache_socket_timeout,
                socket_connect_timeout=cache_socket_timeout,
            )

            use_ssl = (not running_locally()) if cache_ssl is None else cache_ssl
            if use_ssl:
                # ElastiCache requires TLS when AuthToken is enabled
                client_kwargs.update(
                    ssl=True,
                    ssl_cert_reqs='required' if tls_verify else None,
                )
                if tls_verify and ca_bundle_path:
                    client_kwargs['ssl_ca_certs'] = ca_bundle_path

            cache_client = redis.Redis(**client_kwargs)

        # Delegate to base mixin: sets self.redis and runs healthcheck
        super().__init__(redis_client=cache_client, prefix=prefix)
        self.keys = CacheKeySchema(prefix=prefix)

    @staticmethod
    def _resolve_secret(secret_name: str, secrets_client: Optional[BaseClient]) -> tuple[Optional[str], Optional[str]]:
        """Resolve optional username and password from Secrets Manager.

        The secret is expected to be a JSON object with fields:
            - "username": optional string (commonly None for ElastiCache token auth)
            - "password": optional string (the AuthToken)

        Returns:
            Tuple[Optional[str], Optional[str]]:
                (username_or_none, password_or_none)

        Raises:
            CacheUnavailableError:
                On AWS Secrets Manager API failures or a malformed secret payload.
        """
        # fmt: off
        secrets_client_kwargs = {
            'endpoint_url': os.environ.get(ENV.LocalStack.ENDPOINT, 'http://localhost:4566'),
        } if running_locally() else {}
        # fmt: on

        try:
            sm = secrets_client or boto3.client('secretsmanager', **secrets_client_kwargs)
            raw = sm.get_secret_value(SecretId=secret_name).get('SecretString')
            payload = json.loads(raw or '{}')
        except (BotoCoreError, ClientError) as e:
            raise CacheUnavailableError(f"Can't resolve cache credentials from secret '{secret_name}'.") from e
        except json.JSONDecodeError as e:
            raise CacheUnavailableError(f"Invalid JSON in cache secret '{secret_name}'.") from e

        if not isinstance(payload, dict):
            raise CacheUnavailableError(f"Cache secret '{secret_name}' must be a JSON object.")

        return payload.get('username'), payload.get('password')
