from __future__ import annotations

from dataclasses import dataclass

from property_manager.domain.property import Paging, Property, PropertyFilters
from property_manager.ports.property_repository import PropertyRepository


@dataclass(frozen=True, slots=True)
class SearchPropertiesRequest:
    filters: PropertyFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class SearchPropertiesResponse:
    properties: list[Property]
    total_count: int  # Total matching properties before paging
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return Paging(page=self.page, page_size=self.page_size).total_pages(self.total_count)


class SearchProperties:
    """
    Property listing with filters and pagination.

    This use case validates filters and paging, then asks the repository for
    the page and for the count over the same filters. No filtering logic
    exists in the use case.
    """

    def __init__(self, property_repository: PropertyRepository) -> None:
        self._property_repository = property_repository

    def execute(self, request: SearchPropertiesRequest) -> SearchPropertiesResponse:
        """
        Execute property search.

        Validates request parameters before delegating to repository.

        Args:
            request: Search parameters (filters and paging)

        Returns:
            Response containing the page, the total count and the paging echo

        Raises:
            ValidationError: If paging or filter parameters are invalid
            StorageError: If either repository call fails
        """
        request.filters.validate()
        request.paging.validate()

        properties = self._property_repository.get_filtered(
            filters=request.filters,
            paging=request.paging,
        )
        total_count = self._property_repository.count_filtered(filters=request.filters)

        return SearchPropertiesResponse(
            properties=properties,
            total_count=total_count,
            page=request.paging.page,
            page_size=request.paging.page_size,
        )
