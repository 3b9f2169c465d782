"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "name",
                "message": "Must not be blank",
                "code": "REQUIRED",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Not found:
            {
                "detail": "Property with identifier '42' not found",
                "code": "NOT_FOUND"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "idOwner", "message": "Must not be blank", "code": "REQUIRED"}
                ]
            }

        Unexpected failure (no details leak to the client):
            {
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR"
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Property with identifier '42' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {"field": "idOwner", "message": "Must not be blank", "code": "REQUIRED"},
                        {"field": "name", "message": "Must not be blank", "code": "REQUIRED"},
                    ],
                },
                {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
            ]
        }
    )
