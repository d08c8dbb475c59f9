from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.models import UrlMappingModel
from linkshortener.services import AllocationSequencer


def test_first_counter_on_empty_store(store):
    assert AllocationSequencer(store).next_counter() == 1


def test_next_counter_follows_stored_maximum(store):
    created_at = datetime(2026, 1, 1, tzinfo=UTC)
    store.insert(UrlMappingModel('https://example.com/a', 'b', 1, created_at))
    store.insert(UrlMappingModel('https://example.com/b', 'dnh', 12345, created_at))

    assert AllocationSequencer(store).next_counter() == 12346


def test_store_errors_propagate():
    store = MagicMock()
    store.find_by_max_counter.side_effect = DataStoreError("Can't connect to Redis at store.test:6379/0.")

    with pytest.raises(DataStoreError):
        AllocationSequencer(store).next_counter()
