from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class CarStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"


@dataclass(frozen=True, slots=True)
class Category:
    """
    Car category with optional rental discounts.

    Discounts are percentages in [0, 100]; None means "no discount".
    """

    id: int
    name: str
    description: str | None = None
    daily_discount_percent: Decimal | None = None
    weekly_discount_percent: Decimal | None = None

    def validate(self) -> None:
        """
        Validate discount percentages.

        Raises:
            ValueError: If a discount is not a Decimal in [0, 100]
        """
        for field_name in ("daily_discount_percent", "weekly_discount_percent"):
            value = getattr(self, field_name)
            if value is None:
                continue
            # Guardrail: prevent float leakage past boundary
            if not isinstance(value, Decimal):
                raise ValueError(f"{field_name} must be Decimal or None")
            if value < 0 or value > 100:
                raise ValueError(f"{field_name} must be between 0 and 100")


@dataclass(frozen=True, slots=True)
class Car:
    """
    Rentable car snapshot.

    Rates are non-negative currency amounts; model and category are
    referenced by identity only.
    """

    id: int
    vin: str
    license_plate: str
    production_year: int
    model_id: int
    category_id: int
    hourly_rate: Decimal
    daily_rate: Decimal
    weekly_rate: Decimal
    status: CarStatus = CarStatus.AVAILABLE
    color: str | None = None
    mileage_km: int = 0

    def validate(self) -> None:
        """
        Validate rate amounts.

        Raises:
            ValueError: If any rate is not a non-negative Decimal
        """
        for field_name in ("hourly_rate", "daily_rate", "weekly_rate"):
            value = getattr(self, field_name)
            if not isinstance(value, Decimal):
                raise ValueError(f"{field_name} must be Decimal (no floats past the boundary)")
            if value < 0:
                raise ValueError(f"{field_name} must be >= 0")
        if self.mileage_km < 0:
            raise ValueError("mileage_km must be >= 0")
