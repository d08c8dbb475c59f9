"""Unit tests for CacheClientMixin

Test coverage includes:

1. Client construction
   - TLS is enabled outside local runs and can be forced either way.
   - Certificate verification and CA bundle options are passed through.

2. Secret resolution
   - Secrets Manager credentials override the given username and password.
   - API failures and malformed payloads raise CacheUnavailableError.
"""

import json
from unittest.mock import MagicMock

import pytest
import botocore

from linkshortener.dao.cache import CacheClientMixin, CacheKeySchema
from linkshortener.dao.cache import mixins
from linkshortener.dao.exceptions import CacheUnavailableError


@pytest.fixture
def redis_cls(monkeypatch):
    redis_cls = MagicMock()
    monkeypatch.setattr(mixins.redis, 'Redis', redis_cls)
    return redis_cls


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'dev')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


# -------------------------------
# 1. Client construction
# -------------------------------


def test_uses_injected_client(cache_client, app_prefix):
    mixin = CacheClientMixin(cache_client=cache_client, prefix=app_prefix)

    assert mixin.redis is cache_client
    assert isinstance(mixin.keys, CacheKeySchema)
    cache_client.ping.assert_called_once_with()


def test_enables_tls_outside_local_runs(redis_cls):
    CacheClientMixin(cache_host='cache.test', cache_password='token123')

    kwargs = redis_cls.call_args.kwargs
    assert kwargs['host'] == 'cache.test'
    assert kwargs['password'] == 'token123'
    assert kwargs['socket_timeout'] == 0.5
    assert kwargs['ssl'] is True
    assert kwargs['ssl_cert_reqs'] is None


def test_disables_tls_locally(monkeypatch, redis_cls):
    monkeypatch.setenv('APP_ENV', 'local')

    CacheClientMixin(cache_host='localhost')

    assert 'ssl' not in redis_cls.call_args.kwargs


def test_forced_tls_with_verification(monkeypatch, redis_cls):
    monkeypatch.setenv('APP_ENV', 'local')

    CacheClientMixin(cache_host='cache.test', cache_ssl=True, tls_verify=True, ca_bundle_path='/etc/ssl/ca.pem')

    kwargs = redis_cls.call_args.kwargs
    assert kwargs['ssl'] is True
    assert kwargs['ssl_cert_reqs'] == 'required'
    assert kwargs['ssl_ca_certs'] == '/etc/ssl/ca.pem'


# -------------------------------
# 2. Secret resolution
# -------------------------------


def test_secret_credentials_override_arguments(redis_cls, secrets_client):
    CacheClientMixin(cache_host='cache.test', cache_password='ignored', cache_secret='linkshortener/test/cache', secrets_client=secrets_client)

    secrets_client.get_secret_value.assert_called_once_with(SecretId='linkshortener/test/cache')
    kwargs = redis_cls.call_args.kwargs
    assert kwargs['username'] == 'default'
    assert kwargs['password'] == 'token123'


def test_secret_without_username_keeps_argument(redis_cls, secrets_client):
    secrets_client.get_secret_value.return_value = {'SecretString': json.dumps({'password': 'token123'})}

    CacheClientMixin(cache_username='app', cache_secret='linkshortener/test/cache', secrets_client=secrets_client)

    assert redis_cls.call_args.kwargs['username'] == 'app'


def test_secret_client_error(redis_cls, secrets_client):
    secrets_client.get_secret_value.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'GetSecretValue'
    )

    with pytest.raises(CacheUnavailableError, match="secret 'linkshortener/test/cache'"):
        CacheClientMixin(cache_secret='linkshortener/test/cache', secrets_client=secrets_client)
    redis_cls.assert_not_called()


@pytest.mark.parametrize('secret_string', ['{not json', '["token123"]'])
def test_secret_malformed_payload(redis_cls, secrets_client, secret_string):
    secrets_client.get_secret_value.return_value = {'SecretString': secret_string}

    with pytest.raises(CacheUnavailableError):
        CacheClientMixin(cache_secret='linkshortener/test/cache', secrets_client=secrets_client)
