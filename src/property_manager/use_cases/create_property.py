"""Create property use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from property_manager.domain.property import NewProperty, Property
from property_manager.ports.property_repository import PropertyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatePropertyRequest:
    new_property: NewProperty


@dataclass(frozen=True, slots=True)
class CreatePropertyResponse:
    property: Property


class CreateProperty:
    """
    Use case for registering a new property.

    Responsibilities:
    - Validate the creation payload (owner, name, non-negative Decimal price)
    - Delegate persistence to the repository, which assigns id and timestamps
    """

    def __init__(self, property_repository: PropertyRepository) -> None:
        self._repository = property_repository

    def execute(self, request: CreatePropertyRequest) -> CreatePropertyResponse:
        """
        Execute the create property use case.

        Raises:
            ValidationError: If a required field is missing or price is invalid
            StorageError: If the repository fails
        """
        request.new_property.validate()

        created = self._repository.create(request.new_property)

        logger.info("Property created", extra={"property_id": created.id})
        return CreatePropertyResponse(property=created)
