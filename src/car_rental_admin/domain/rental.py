from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum

from car_rental_admin.domain.errors import InvalidWindow


class RateType(str, Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


class RentalStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RETURNED = "RETURNED"
    CANCELLED = "CANCELLED"
    # Never stored: an ACTIVE rental past its planned end is reported as OVERDUE
    OVERDUE = "OVERDUE"


TERMINAL_STATUSES = frozenset({RentalStatus.RETURNED, RentalStatus.CANCELLED})


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Half-open time interval [start, end)."""

    start: datetime
    end: datetime

    def validate(self) -> None:
        """
        Validate that the window has a positive length.

        Raises:
            InvalidWindow: If start is not strictly before end
        """
        if not self.start < self.end:
            raise InvalidWindow(
                "end must be after start",
                start=self.start.isoformat(),
                end=self.end.isoformat(),
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: TimeWindow) -> bool:
        # [a1, a2) and [b1, b2) overlap iff a1 < b2 and b1 < a2
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True, slots=True)
class Rental:
    """
    A single rental transaction (aggregate root).

    Customer and car are referenced by identity only. Invariants kept by
    the lifecycle:
    - start_at < planned_end_at
    - actual_return_at, once set, is never cleared
    - total_price == base_price + late_fee after every re-pricing
    """

    customer_id: int
    car_id: int
    start_at: datetime
    planned_end_at: datetime
    rate_type: RateType
    base_price: Decimal
    late_fee: Decimal = Decimal("0.00")
    total_price: Decimal = Decimal("0.00")
    status: RentalStatus = RentalStatus.ACTIVE
    actual_return_at: datetime | None = None
    notes: str | None = None
    id: int | None = None

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start_at, self.planned_end_at)

    @property
    def is_active(self) -> bool:
        return self.status == RentalStatus.ACTIVE

    def is_overdue(self, now: datetime) -> bool:
        return self.is_active and self.planned_end_at < now

    def effective_status(self, now: datetime) -> RentalStatus:
        """Stored status, with ACTIVE projected to OVERDUE past the planned end."""
        if self.is_overdue(now):
            return RentalStatus.OVERDUE
        return self.status
