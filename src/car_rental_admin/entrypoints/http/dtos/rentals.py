from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

RATE_TYPE_DESCRIPTION = "Rate type: HOURLY, DAILY or WEEKLY"


class CreateRentalRequestDTO(BaseModel):
    """Request payload for booking a car."""

    customer_id: int = Field(description="Customer booking the car", examples=[1], ge=1)
    car_id: int = Field(description="Car to book", examples=[3], ge=1)
    rate_type: str = Field(description=RATE_TYPE_DESCRIPTION, examples=["DAILY"])
    start_at: datetime = Field(
        description="Rental start (ISO 8601, UTC assumed when no offset is given)",
        examples=["2026-03-02T09:00:00Z"],
    )
    planned_end_at: datetime = Field(
        description="Planned end, must be after start_at",
        examples=["2026-03-04T09:00:00Z"],
    )
    notes: str | None = Field(default=None, max_length=1000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customer_id": 1,
                "car_id": 3,
                "rate_type": "DAILY",
                "start_at": "2026-03-02T09:00:00Z",
                "planned_end_at": "2026-03-04T09:00:00Z",
                "notes": "Child seat requested",
            }
        }
    )


class PricePreviewRequestDTO(BaseModel):
    """Request payload for quoting a rental without booking it."""

    car_id: int = Field(examples=[3], ge=1)
    rate_type: str = Field(description=RATE_TYPE_DESCRIPTION, examples=["HOURLY"])
    start_at: datetime = Field(examples=["2026-03-02T09:00:00Z"])
    planned_end_at: datetime = Field(examples=["2026-03-02T12:30:00Z"])


class PricePreviewResponseDTO(BaseModel):
    car_id: int
    rate_type: str
    price: str = Field(description="Quoted price as decimal string", examples=["95.00"])
    discount_percent: str = Field(
        description="Category discount applied, in percent", examples=["0"]
    )


class ExtendRentalRequestDTO(BaseModel):
    new_planned_end_at: datetime = Field(
        description="New planned end, must be after the current planned end",
        examples=["2026-03-05T09:00:00Z"],
    )


class UpdateRentalRequestDTO(BaseModel):
    """Request payload for replacing the plan of an active rental."""

    planned_end_at: datetime = Field(examples=["2026-03-05T09:00:00Z"])
    rate_type: str = Field(description=RATE_TYPE_DESCRIPTION, examples=["WEEKLY"])
    notes: str | None = Field(default=None, max_length=1000)


class ReturnRentalRequestDTO(BaseModel):
    """Request payload for closing a rental. An empty body returns it now."""

    actual_return_at: datetime | None = Field(
        default=None,
        description="Return time (defaults to now)",
        examples=["2026-03-04T10:30:00Z"],
    )
    notes: str | None = Field(default=None, max_length=1000)
    new_mileage_km: int | None = Field(
        default=None,
        description="Odometer reading at return; ignored when lower than the current one",
        examples=[48250],
        ge=0,
    )


class RentalResponseDTO(BaseModel):
    id: int
    customer_id: int
    car_id: int
    rate_type: str
    status: str = Field(description="Stored status: ACTIVE, RETURNED or CANCELLED")
    is_overdue: bool = Field(description="ACTIVE and past its planned end")
    start_at: datetime
    planned_end_at: datetime
    actual_return_at: datetime | None = None
    base_price: str = Field(examples=["450.00"])
    late_fee: str = Field(examples=["0.00"])
    total_price: str = Field(examples=["450.00"])
    notes: str | None = None


class RentalListResponseDTO(BaseModel):
    rentals: list[RentalResponseDTO]
    total: int
