"""REST API error response models.

Every HTTP error of the rental API shares this body shape.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error inside a validation failure."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "planned_end_at",
                "message": "Input should be a valid datetime",
                "code": "datetime_from_date_parsing",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Domain error:
            {
                "detail": "Car is not available for the requested window",
                "code": "CAR_UNAVAILABLE"
            }

        Request validation error:
            {
                "detail": "Invalid request parameters",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "planned_end_at", "message": "Field required", "code": "missing"}
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Rental with identifier '7' not found", "code": "NOT_FOUND"},
                {"detail": "Cannot return a rental in status CANCELLED", "code": "INVALID_STATE"},
                {
                    "detail": "Invalid request parameters",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "car_id",
                            "message": "Input should be greater than or equal to 1",
                            "code": "greater_than_equal",
                        },
                    ],
                },
            ]
        }
    )
