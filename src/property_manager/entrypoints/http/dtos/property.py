from decimal import Decimal
from typing import Annotated

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from property_manager.domain.property import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    MAX_OWNER_ID_LENGTH,
    MAX_PAGE_SIZE,
)


# Decimal inside the service, JSON number on the wire
WirePrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PropertyResponseDTO(BaseModel):
    id: str
    owner_id: str = Field(alias="idOwner")
    name: str
    address: str
    price: WirePrice
    image: str

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "66f1c2a4e13b5c0d8a9b7e21",
                "idOwner": "owner-1",
                "name": "Casa Verde",
                "address": "Calle Mayor 1",
                "price": 150000,
                "image": "https://images.example.com/casa-verde.jpg",
            }
        },
    )


class CreatePropertyDTO(BaseModel):
    """Request payload for creating a property."""

    owner_id: str = Field(
        alias="idOwner",
        description="Owner identifier",
        examples=["owner-1"],
        max_length=MAX_OWNER_ID_LENGTH,
    )
    name: str = Field(description="Display name", examples=["Casa Verde"], max_length=MAX_NAME_LENGTH)
    address: str = Field(
        default="",
        description="Free-text location",
        examples=["Calle Mayor 1"],
        max_length=MAX_ADDRESS_LENGTH,
    )
    price: Decimal = Field(
        description="Price, non-negative, at most two decimal places",
        examples=[150000],
        ge=0,
    )
    image: str = Field(default="", description="Image URL or reference", examples=["a.jpg"])

    model_config = ConfigDict(populate_by_name=True)


class UpdatePropertyDTO(BaseModel):
    """
    Request payload for a partial update.

    Omitted, null or blank string fields are left unchanged.
    """

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    address: str | None = Field(default=None, max_length=MAX_ADDRESS_LENGTH)
    price: Decimal | None = Field(default=None, ge=0)
    image: str | None = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"price": 310000}},
    )


class PropertySearchQueryDTO(BaseModel):
    """Query parameters for listing properties."""

    name: str | None = None
    address: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


def search_query_params(
    name: str | None = Query(
        default=None,
        description="Case-insensitive substring of the property name",
        examples=["casa"],
    ),
    address: str | None = Query(
        default=None,
        description="Case-insensitive substring of the address",
        examples=["mayor"],
    ),
    min_price: Decimal | None = Query(
        default=None,
        alias="minPrice",
        description="Minimum price (inclusive)",
        examples=[100000],
    ),
    max_price: Decimal | None = Query(
        default=None,
        alias="maxPrice",
        description="Maximum price (inclusive)",
        examples=[500000],
    ),
    page: int = Query(default=DEFAULT_PAGE, ge=1, description="1-indexed page number"),
    page_size: int = Query(
        default=DEFAULT_PAGE_SIZE,
        alias="pageSize",
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Properties per page",
    ),
) -> PropertySearchQueryDTO:
    """Collect the camelCase query string into a typed DTO."""
    return PropertySearchQueryDTO(
        name=name,
        address=address,
        min_price=min_price,
        max_price=max_price,
        page=page,
        page_size=page_size,
    )
