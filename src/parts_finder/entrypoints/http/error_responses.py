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
                "field": "vin",
                "message": "Must be exactly 17 characters",
                "code": "INVALID_LENGTH",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {"detail": "Vehicle with identifier 'abc' not found", "code": "NOT_FOUND"}

        Store unavailable:
            {"detail": "Could not load vehicles from the store", "code": "SYNC_ERROR"}

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "year", "message": "Must be between 1900 and 2027", "code": "OUT_OF_RANGE"}
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Vehicle with identifier 'abc' not found", "code": "NOT_FOUND"},
                {"detail": "Another vehicle operation is in progress", "code": "BUSY"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "mileage",
                            "message": "Must be between 0 and 9999999",
                            "code": "OUT_OF_RANGE",
                        },
                    ],
                },
            ]
        }
    )
