"""MongoDB implementation of PropertyRepository."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from property_manager.domain.errors import StorageError
from property_manager.domain.property import (
    NewProperty,
    Paging,
    Property,
    PropertyFilters,
    utc_now,
)
from property_manager.ports.property_repository import PropertyRepository


SORT_ORDER = [("name", ASCENDING), ("_id", ASCENDING)]


def build_mongo_filter(filters: PropertyFilters) -> dict[str, Any]:
    """
    Translate domain filters into a MongoDB filter document.

    Text patterns become escaped, case-insensitive regexes (substring match).
    Price bounds become inclusive $gte/$lte on the same key. An empty
    document matches every property.

    Args:
        filters: Filter criteria (AND semantics)

    Returns:
        Filter document usable by both find() and count_documents()
    """
    query: dict[str, Any] = {}

    name_pattern = filters.name_pattern
    if name_pattern:
        query["name"] = {"$regex": re.escape(name_pattern), "$options": "i"}

    address_pattern = filters.address_pattern
    if address_pattern:
        query["address"] = {"$regex": re.escape(address_pattern), "$options": "i"}

    price: dict[str, Decimal128] = {}
    if filters.min_price is not None:
        price["$gte"] = Decimal128(filters.min_price)
    if filters.max_price is not None:
        price["$lte"] = Decimal128(filters.max_price)
    if price:
        query["price"] = price

    return query


class MongoPropertyRepository(PropertyRepository):
    """
    MongoDB implementation of PropertyRepository.

    - One document per property in a single collection
    - Prices stored as Decimal128 (no float drift)
    - Ids are ObjectIds; malformed ids resolve to "not found"
    - PyMongoError is re-raised as StorageError
    """

    def __init__(
        self,
        collection: Collection,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize repository with a collection handle.

        Args:
            collection: The ``properties`` collection
            clock: Source of creation timestamps
        """
        self._collection = collection
        self._clock = clock

    def create(self, new_property: NewProperty) -> Property:
        now = self._clock()
        document = {
            "idOwner": new_property.owner_id,
            "name": new_property.name,
            "address": new_property.address,
            "price": Decimal128(new_property.price),
            "image": new_property.image,
            "createdAt": now,
            "updatedAt": now,
        }
        with _storage_errors("create"):
            result = self._collection.insert_one(document)

        document["_id"] = result.inserted_id
        return self._to_domain(document)

    def get_by_id(self, property_id: str) -> Property | None:
        if not ObjectId.is_valid(property_id):
            return None

        with _storage_errors("get_by_id"):
            document = self._collection.find_one({"_id": ObjectId(property_id)})

        return self._to_domain(document) if document else None

    def get_filtered(self, filters: PropertyFilters, paging: Paging) -> list[Property]:
        """
        Fetch one ordered page of matching properties.

        Sort is applied by the server before skip/limit, so the page is a
        slice of the fully ordered result.
        """
        with _storage_errors("get_filtered"):
            cursor = (
                self._collection.find(build_mongo_filter(filters))
                .sort(SORT_ORDER)
                .skip(paging.offset)
                .limit(paging.page_size)
            )
            documents = list(cursor)

        return [self._to_domain(document) for document in documents]

    def count_filtered(self, filters: PropertyFilters) -> int:
        with _storage_errors("count_filtered"):
            return self._collection.count_documents(build_mongo_filter(filters))

    def update(self, property_id: str, prop: Property) -> Property | None:
        if not ObjectId.is_valid(property_id):
            return None

        document = {
            "idOwner": prop.owner_id,
            "name": prop.name,
            "address": prop.address,
            "price": Decimal128(prop.price),
            "image": prop.image,
            "createdAt": prop.created_at,
            "updatedAt": prop.updated_at,
        }
        with _storage_errors("update"):
            result = self._collection.replace_one({"_id": ObjectId(property_id)}, document)

        if result.matched_count == 0:
            return None

        document["_id"] = ObjectId(property_id)
        return self._to_domain(document)

    def delete(self, property_id: str) -> bool:
        if not ObjectId.is_valid(property_id):
            return False

        with _storage_errors("delete"):
            result = self._collection.delete_one({"_id": ObjectId(property_id)})

        return result.deleted_count > 0

    def _to_domain(self, document: dict[str, Any]) -> Property:
        """Convert a stored document to a Property entity."""
        price = document["price"]
        return Property(
            id=str(document["_id"]),
            owner_id=document["idOwner"],
            name=document["name"],
            address=document.get("address", ""),
            price=price.to_decimal() if isinstance(price, Decimal128) else price,
            image=document.get("image", ""),
            created_at=_as_utc(document["createdAt"]),
            updated_at=_as_utc(document["updatedAt"]),
        )


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        raise StorageError(f"MongoDB {operation} failed", operation=operation) from exc


def _as_utc(value: datetime) -> datetime:
    # Clients created without tz_aware=True return naive UTC datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
