from __future__ import annotations

import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection

from property_manager.infra.config import mongo_database, mongo_url

logger = logging.getLogger(__name__)

PROPERTIES_COLLECTION = "properties"

# Lazy initialization - the client owns a connection pool and is shared
_client: MongoClient | None = None


def get_client() -> MongoClient:
    """
    Get or create the MongoDB client (lazy initialization).

    tz_aware=True makes stored dates come back as UTC-aware datetimes.
    """
    global _client
    if _client is None:
        _client = MongoClient(
            mongo_url(),
            tz_aware=True,
            serverSelectionTimeoutMS=5000,
        )
    return _client


def get_properties_collection() -> Collection:
    return get_client()[mongo_database()][PROPERTIES_COLLECTION]


def ensure_indexes(collection: Collection) -> None:
    """
    Create the indexes the listing query relies on.

    - price: range filters
    - name: sort order (with _id as tie breaker)
    """
    collection.create_index([("price", ASCENDING)], name="price_asc")
    collection.create_index([("name", ASCENDING), ("_id", ASCENDING)], name="name_asc")
    logger.info("MongoDB indexes ensured", extra={"collection": collection.name})


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
