from __future__ import annotations

from property_manager.domain.property import (
    NewProperty,
    Paging,
    Property,
    PropertyFilters,
    PropertyUpdate,
)
from property_manager.entrypoints.http.dtos.property import (
    CreatePropertyDTO,
    PropertyResponseDTO,
    PropertySearchQueryDTO,
    UpdatePropertyDTO,
)
from property_manager.use_cases.search_properties import (
    SearchPropertiesRequest,
    SearchPropertiesResponse,
)


TOTAL_COUNT_HEADER = "X-Total-Count"
PAGE_HEADER = "X-Page"
PAGE_SIZE_HEADER = "X-Page-Size"
PAGINATION_HEADERS = (TOTAL_COUNT_HEADER, PAGE_HEADER, PAGE_SIZE_HEADER)


class PropertyMapper:
    """Maps between REST DTOs and domain models for properties."""

    @staticmethod
    def to_domain_filters(dto: PropertySearchQueryDTO) -> PropertyFilters:
        return PropertyFilters(
            name=dto.name,
            address=dto.address,
            min_price=dto.min_price,
            max_price=dto.max_price,
        )

    @staticmethod
    def to_domain_paging(dto: PropertySearchQueryDTO) -> Paging:
        return Paging(page=dto.page, page_size=dto.page_size)

    @staticmethod
    def to_search_request(dto: PropertySearchQueryDTO) -> SearchPropertiesRequest:
        """
        Convenience method: builds complete domain request from DTO.

        Args:
            dto: Parsed query parameters

        Returns:
            SearchPropertiesRequest with filters and paging
        """
        return SearchPropertiesRequest(
            filters=PropertyMapper.to_domain_filters(dto),
            paging=PropertyMapper.to_domain_paging(dto),
        )

    @staticmethod
    def to_new_property(dto: CreatePropertyDTO) -> NewProperty:
        return NewProperty(
            owner_id=dto.owner_id,
            name=dto.name,
            address=dto.address,
            price=dto.price,
            image=dto.image,
        )

    @staticmethod
    def to_domain_update(dto: UpdatePropertyDTO) -> PropertyUpdate:
        return PropertyUpdate(
            name=dto.name,
            address=dto.address,
            price=dto.price,
            image=dto.image,
        )

    @staticmethod
    def to_response(prop: Property) -> PropertyResponseDTO:
        """
        Converts a Property entity to its wire representation.

        owner_id is exposed as ``idOwner``; timestamps stay internal.
        """
        return PropertyResponseDTO(
            id=prop.id,
            owner_id=prop.owner_id,
            name=prop.name,
            address=prop.address,
            price=prop.price,
            image=prop.image,
        )

    @staticmethod
    def to_pagination_headers(result: SearchPropertiesResponse) -> dict[str, str]:
        """Out-of-band pagination metadata for the list response."""
        return {
            TOTAL_COUNT_HEADER: str(result.total_count),
            PAGE_HEADER: str(result.page),
            PAGE_SIZE_HEADER: str(result.page_size),
        }
