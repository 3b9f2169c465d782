from fastapi import APIRouter, Depends, Request, Response, status

from property_manager.entrypoints.http.dependencies import (
    get_create_property_use_case,
    get_delete_property_use_case,
    get_get_property_by_id_use_case,
    get_search_properties_use_case,
    get_update_property_use_case,
)
from property_manager.entrypoints.http.dtos.property import (
    CreatePropertyDTO,
    PropertyResponseDTO,
    PropertySearchQueryDTO,
    UpdatePropertyDTO,
    search_query_params,
)
from property_manager.entrypoints.http.error_responses import ErrorResponse
from property_manager.entrypoints.http.mappers.property_mapper import PropertyMapper
from property_manager.use_cases.create_property import CreateProperty, CreatePropertyRequest
from property_manager.use_cases.delete_property import DeleteProperty, DeletePropertyRequest
from property_manager.use_cases.get_property_by_id import GetPropertyById, GetPropertyByIdRequest
from property_manager.use_cases.search_properties import SearchProperties
from property_manager.use_cases.update_property import UpdateProperty, UpdatePropertyRequest


router = APIRouter(tags=["Properties"])

VALIDATION_ERROR_RESPONSE = {
    "model": ErrorResponse,
    "description": "Validation error",
}
NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Property not found",
    "content": {
        "application/json": {
            "example": {
                "detail": "Property with identifier '66f1c2a4e13b5c0d8a9b7e21' not found",
                "code": "NOT_FOUND",
            }
        }
    },
}
INTERNAL_ERROR_RESPONSE = {
    "model": ErrorResponse,
    "description": "Unexpected failure",
    "content": {
        "application/json": {
            "example": {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}
        }
    },
}


@router.get(
    "/properties",
    response_model=list[PropertyResponseDTO],
    summary="List properties",
    description="""
    List properties with optional filters and pagination.

    ## Filters
    - All filters use AND semantics
    - name/address: case-insensitive substring match (blank is ignored)
    - minPrice/maxPrice: inclusive range

    ## Pagination
    - Results are ordered by name
    - Defaults: page=1, pageSize=10 (max 100)
    - Metadata travels in the X-Total-Count, X-Page and X-Page-Size headers

    ## Example
    ```
    GET /api/properties?name=casa&minPrice=100000&page=2&pageSize=5
    ```
    """,
    responses={
        400: VALIDATION_ERROR_RESPONSE,
        500: INTERNAL_ERROR_RESPONSE,
    },
)
def list_properties(
    response: Response,
    query: PropertySearchQueryDTO = Depends(search_query_params),
    use_case: SearchProperties = Depends(get_search_properties_use_case),
) -> list[PropertyResponseDTO]:
    """List properties endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = PropertyMapper.to_search_request(query)

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response (body is the page, metadata goes in headers)
    response.headers.update(PropertyMapper.to_pagination_headers(result))
    return [PropertyMapper.to_response(prop) for prop in result.properties]


@router.get(
    "/properties/{property_id}",
    name="get_property",
    response_model=PropertyResponseDTO,
    summary="Get property by ID",
    responses={
        404: NOT_FOUND_RESPONSE,
        500: INTERNAL_ERROR_RESPONSE,
    },
)
def get_property(
    property_id: str,
    use_case: GetPropertyById = Depends(get_get_property_by_id_use_case),
) -> PropertyResponseDTO:
    result = use_case.execute(GetPropertyByIdRequest(property_id=property_id))
    return PropertyMapper.to_response(result.property)


@router.post(
    "/properties",
    response_model=PropertyResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="""
    Create a property. The server assigns the id and the timestamps.

    The response carries a Location header pointing at the new property.
    """,
    responses={
        400: VALIDATION_ERROR_RESPONSE,
        500: INTERNAL_ERROR_RESPONSE,
    },
)
def create_property(
    payload: CreatePropertyDTO,
    request: Request,
    response: Response,
    use_case: CreateProperty = Depends(get_create_property_use_case),
) -> PropertyResponseDTO:
    result = use_case.execute(
        CreatePropertyRequest(new_property=PropertyMapper.to_new_property(payload))
    )

    response.headers["Location"] = str(
        request.url_for("get_property", property_id=result.property.id)
    )
    return PropertyMapper.to_response(result.property)


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponseDTO,
    summary="Update property",
    description="""
    Partially update a property.

    Omitted, null or blank string fields keep their current value, so a text
    field cannot be cleared. owner and creation time never change.
    """,
    responses={
        400: VALIDATION_ERROR_RESPONSE,
        404: NOT_FOUND_RESPONSE,
        500: INTERNAL_ERROR_RESPONSE,
    },
)
def update_property(
    property_id: str,
    payload: UpdatePropertyDTO,
    use_case: UpdateProperty = Depends(get_update_property_use_case),
) -> PropertyResponseDTO:
    result = use_case.execute(
        UpdatePropertyRequest(
            property_id=property_id,
            changes=PropertyMapper.to_domain_update(payload),
        )
    )
    return PropertyMapper.to_response(result.property)


@router.delete(
    "/properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete property",
    responses={
        404: NOT_FOUND_RESPONSE,
        500: INTERNAL_ERROR_RESPONSE,
    },
)
def delete_property(
    property_id: str,
    use_case: DeleteProperty = Depends(get_delete_property_use_case),
) -> Response:
    use_case.execute(DeletePropertyRequest(property_id=property_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
