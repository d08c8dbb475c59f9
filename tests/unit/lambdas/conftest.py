from unittest.mock import MagicMock

import pytest

from linkshortener.utils.config import AppSettings


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.setenv('APP_NAME', 'linkshortener')


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings.from_document(
        {
            'base_url': 'https://sho.rt',
            'cache_ttl': 600,
            'store': {'host': 'store.test', 'port': 6379, 'db': 0},
            'cache': {'host': 'cache.test', 'port': 6379},
        }
    )


@pytest.fixture
def wire_app(monkeypatch, settings, store, cache):
    """Wire a lambda app module to in-memory DAOs and the `settings` fixture."""

    def wire(app):
        store_cls = MagicMock(return_value=store)
        monkeypatch.setattr(app, 'load_settings', lambda: settings)
        monkeypatch.setattr(app, 'UrlMappingRedisDAO', store_cls)
        monkeypatch.setattr(app, 'connect_cache', MagicMock(return_value=cache))
        return store_cls

    return wire
