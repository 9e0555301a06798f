"""Get dashboard summary use case."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from car_rental_admin.domain.clock import Clock, utc_now
from car_rental_admin.domain.rental import RentalStatus
from car_rental_admin.ports.rental_repository import RentalRepository

DEFAULT_DAYS_BACK = 7


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    """
    Activity counters for the back-office dashboard.

    Periods are calendar based in the clock's timezone: "today" is the
    current day from midnight and "this week" is the whole ISO week, Monday
    midnight to the next Monday. Revenue is the total price of rentals
    returned within the period.
    """

    rentals_today: int
    rentals_this_week: int
    active_rentals: int
    overdue_rentals: int
    revenue_today: Decimal
    revenue_this_week: Decimal


@dataclass(frozen=True, slots=True)
class DailyRentalCount:
    day: date
    count: int


class GetDashboardSummary:
    def __init__(self, rental_repository: RentalRepository, clock: Clock = utc_now) -> None:
        self._rentals = rental_repository
        self._clock = clock

    def execute(self) -> DashboardSummary:
        now = self._clock()
        today_start, week_start = self.period_starts(now)
        tomorrow_start = today_start + timedelta(days=1)
        next_week_start = week_start + timedelta(days=7)

        return DashboardSummary(
            rentals_today=self._rentals.count_started_between(today_start, tomorrow_start),
            rentals_this_week=self._rentals.count_started_between(week_start, next_week_start),
            active_rentals=self._rentals.count_by_status(RentalStatus.ACTIVE),
            overdue_rentals=self._rentals.count_overdue(now),
            revenue_today=self._rentals.sum_revenue_between(today_start, tomorrow_start),
            revenue_this_week=self._rentals.sum_revenue_between(week_start, next_week_start),
        )

    def rentals_per_day(self, days_back: int = DEFAULT_DAYS_BACK) -> list[DailyRentalCount]:
        """
        Rentals started on each of the last days_back days, oldest first, today included.

        A non-positive days_back falls back to a week.
        """
        if days_back <= 0:
            days_back = DEFAULT_DAYS_BACK

        today_start, _ = self.period_starts(self._clock())
        counts = []
        for offset in range(days_back - 1, -1, -1):
            day_start = today_start - timedelta(days=offset)
            counts.append(
                DailyRentalCount(
                    day=day_start.date(),
                    count=self._rentals.count_started_between(
                        day_start, day_start + timedelta(days=1)
                    ),
                )
            )
        return counts

    @staticmethod
    def period_starts(now: datetime) -> tuple[datetime, datetime]:
        """Start of today and of the current ISO week for a given instant."""
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return today_start, today_start - timedelta(days=today_start.weekday())
