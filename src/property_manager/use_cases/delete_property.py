from __future__ import annotations

import logging
from dataclasses import dataclass

from property_manager.domain.errors import NotFoundError
from property_manager.ports.property_repository import PropertyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletePropertyRequest:
    property_id: str


class DeleteProperty:
    """
    Use case for deleting a property.

    Deleting an id that does not resolve (never existed, or already deleted)
    raises NotFoundError and changes nothing.
    """

    def __init__(self, property_repository: PropertyRepository) -> None:
        self._repository = property_repository

    def execute(self, request: DeletePropertyRequest) -> None:
        if not self._repository.delete(request.property_id):
            raise NotFoundError(resource="Property", identifier=request.property_id)

        logger.info("Property deleted", extra={"property_id": request.property_id})
