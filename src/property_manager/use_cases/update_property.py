"""Update property use case (partial update merge)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from property_manager.domain.errors import NotFoundError
from property_manager.domain.property import Property, PropertyUpdate, utc_now
from property_manager.ports.property_repository import PropertyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdatePropertyRequest:
    property_id: str
    changes: PropertyUpdate


@dataclass(frozen=True, slots=True)
class UpdatePropertyResponse:
    property: Property


class UpdateProperty:
    """
    Use case for partially updating a property.

    Flow:
    1. Load the existing property (NotFoundError if absent, nothing written)
    2. Merge the sparse changes onto it (PropertyUpdate.apply_to)
    3. Write the merged property; zero matched during the write
       (e.g. concurrent delete) is also NotFoundError
    """

    def __init__(
        self,
        property_repository: PropertyRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = property_repository
        self._clock = clock

    def execute(self, request: UpdatePropertyRequest) -> UpdatePropertyResponse:
        """
        Execute the update property use case.

        Raises:
            ValidationError: If the new price is invalid
            NotFoundError: If the property does not exist before or during the write
            StorageError: If the repository fails
        """
        request.changes.validate()

        existing = self._repository.get_by_id(request.property_id)
        if existing is None:
            raise NotFoundError(resource="Property", identifier=request.property_id)

        merged = request.changes.apply_to(existing, now=self._clock())

        updated = self._repository.update(request.property_id, merged)
        if updated is None:
            raise NotFoundError(resource="Property", identifier=request.property_id)

        logger.info("Property updated", extra={"property_id": updated.id})
        return UpdatePropertyResponse(property=updated)
