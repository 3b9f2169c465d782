"""Get property by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from property_manager.domain.errors import NotFoundError
from property_manager.domain.property import Property
from property_manager.ports.property_repository import PropertyRepository


@dataclass(frozen=True, slots=True)
class GetPropertyByIdRequest:
    """Request to get a property by ID."""

    property_id: str


@dataclass(frozen=True, slots=True)
class GetPropertyByIdResponse:
    """Response containing the requested property."""

    property: Property


class GetPropertyById:
    """
    Use case for retrieving a single property by ID.

    Ids are opaque: a malformed id is simply not found.
    """

    def __init__(self, property_repository: PropertyRepository) -> None:
        """
        Initialize use case with dependencies.

        Args:
            property_repository: Repository for property data access
        """
        self._repository = property_repository

    def execute(self, request: GetPropertyByIdRequest) -> GetPropertyByIdResponse:
        """
        Execute the get property by ID use case.

        Args:
            request: Request containing property_id

        Returns:
            GetPropertyByIdResponse with the property

        Raises:
            NotFoundError: If no property has the given ID
        """
        prop = self._repository.get_by_id(request.property_id)

        if prop is None:
            raise NotFoundError(resource="Property", identifier=request.property_id)

        return GetPropertyByIdResponse(property=prop)
