from datetime import datetime

from pydantic import BaseModel, Field


class AvailabilityQueryDTO(BaseModel):
    """Query parameters describing the window [start_at, end_at)."""

    start_at: datetime = Field(
        description="Window start (inclusive)", examples=["2026-03-02T09:00:00Z"]
    )
    end_at: datetime = Field(
        description="Window end (exclusive)", examples=["2026-03-04T09:00:00Z"]
    )


class CarResponseDTO(BaseModel):
    id: int
    vin: str
    license_plate: str
    production_year: int
    color: str | None = None
    status: str
    model_id: int
    category_id: int
    hourly_rate: str = Field(examples=["30.00"])
    daily_rate: str = Field(examples=["150.00"])
    weekly_rate: str = Field(examples=["450.00"])
    mileage_km: int


class AvailableCarsResponseDTO(BaseModel):
    cars: list[CarResponseDTO]
    total: int


class CarAvailabilityResponseDTO(BaseModel):
    car_id: int
    start_at: datetime
    end_at: datetime
    available: bool
