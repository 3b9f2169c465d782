"""
Dependency injection for FastAPI routes.

Key principle: database sessions and repositories are per-request.
Only stateless, pooled clients are shared across requests.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends

from property_manager.adapters.in_memory_property_repository import InMemoryPropertyRepository
from property_manager.adapters.mongo_property_repository import MongoPropertyRepository
from property_manager.adapters.postgres_property_repository import PostgresPropertyRepository
from property_manager.infra.config import storage_backend
from property_manager.infra.db.session import get_session
from property_manager.infra.mongo.client import get_properties_collection
from property_manager.ports.property_repository import PropertyRepository
from property_manager.use_cases.create_property import CreateProperty
from property_manager.use_cases.delete_property import DeleteProperty
from property_manager.use_cases.get_property_by_id import GetPropertyById
from property_manager.use_cases.search_properties import SearchProperties
from property_manager.use_cases.update_property import UpdateProperty

# The memory backend keeps its data for the life of the process
_memory_repository: InMemoryPropertyRepository | None = None


def get_memory_repository() -> InMemoryPropertyRepository:
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryPropertyRepository()
    return _memory_repository


def get_property_repository() -> Generator[PropertyRepository, None, None]:
    """
    Provides the repository for the configured storage backend (PROPERTY_STORE).

    - mongodb: repository over the shared client's ``properties`` collection
    - postgres: repository over a per-request session (commit/rollback on exit)
    - memory: the process-wide in-memory repository

    Yields:
        PropertyRepository: Repository for a single request
    """
    backend = storage_backend()

    if backend == "postgres":
        with get_session() as session:
            yield PostgresPropertyRepository(session=session)
    elif backend == "mongodb":
        yield MongoPropertyRepository(collection=get_properties_collection())
    else:
        yield get_memory_repository()


def get_search_properties_use_case(
    repository: PropertyRepository = Depends(get_property_repository),
) -> SearchProperties:
    """
    Factory function that returns a configured SearchProperties use case.

    Called per-request so each request gets a fresh use case bound to its
    own repository.
    """
    return SearchProperties(property_repository=repository)


def get_get_property_by_id_use_case(
    repository: PropertyRepository = Depends(get_property_repository),
) -> GetPropertyById:
    return GetPropertyById(property_repository=repository)


def get_create_property_use_case(
    repository: PropertyRepository = Depends(get_property_repository),
) -> CreateProperty:
    return CreateProperty(property_repository=repository)


def get_update_property_use_case(
    repository: PropertyRepository = Depends(get_property_repository),
) -> UpdateProperty:
    return UpdateProperty(property_repository=repository)


def get_delete_property_use_case(
    repository: PropertyRepository = Depends(get_property_repository),
) -> DeleteProperty:
    return DeleteProperty(property_repository=repository)
