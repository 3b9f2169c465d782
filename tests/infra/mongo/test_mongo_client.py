"""Tests for MongoDB client helpers."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from pymongo import ASCENDING
from pymongo.collection import Collection

from property_manager.infra.mongo import client as mongo_client
from property_manager.infra.mongo.client import (
    PROPERTIES_COLLECTION,
    close_client,
    ensure_indexes,
    get_client,
    get_properties_collection,
)


@pytest.fixture(autouse=True)
def reset_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mongo_client, "_client", None)


def test_ensure_indexes_creates_price_and_name_indexes() -> None:
    collection = Mock(spec=Collection)

    ensure_indexes(collection)

    collection.create_index.assert_any_call([("price", ASCENDING)], name="price_asc")
    collection.create_index.assert_any_call(
        [("name", ASCENDING), ("_id", ASCENDING)], name="name_asc"
    )


def test_get_client_is_created_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGODB_URL", "mongodb://db.test:27017")

    with patch.object(mongo_client, "MongoClient") as mongo_client_class:
        first = get_client()
        second = get_client()

    assert first is second
    mongo_client_class.assert_called_once_with(
        "mongodb://db.test:27017", tz_aware=True, serverSelectionTimeoutMS=5000
    )


def test_get_properties_collection_uses_configured_database(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MONGODB_DATABASE", "listings")

    with patch.object(mongo_client, "MongoClient") as mongo_client_class:
        get_properties_collection()

    client = mongo_client_class.return_value
    client.__getitem__.assert_called_once_with("listings")
    client.__getitem__.return_value.__getitem__.assert_called_once_with(PROPERTIES_COLLECTION)


def test_close_client_releases_and_resets() -> None:
    with patch.object(mongo_client, "MongoClient") as mongo_client_class:
        get_client()
        close_client()
        get_client()

    mongo_client_class.return_value.close.assert_called_once()
    assert mongo_client_class.call_count == 2


def test_close_client_without_client_is_noop() -> None:
    close_client()
