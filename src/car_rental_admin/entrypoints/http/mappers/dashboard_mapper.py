from __future__ import annotations

from car_rental_admin.entrypoints.http.dtos.dashboard import (
    DailyRentalCountDTO,
    DashboardSummaryResponseDTO,
)
from car_rental_admin.use_cases.get_dashboard_summary import DailyRentalCount, DashboardSummary


class DashboardMapper:
    @staticmethod
    def to_response(summary: DashboardSummary) -> DashboardSummaryResponseDTO:
        return DashboardSummaryResponseDTO(
            rentals_today=summary.rentals_today,
            rentals_this_week=summary.rentals_this_week,
            active_rentals=summary.active_rentals,
            overdue_rentals=summary.overdue_rentals,
            revenue_today=str(summary.revenue_today),
            revenue_this_week=str(summary.revenue_this_week),
        )

    @staticmethod
    def to_daily_counts(counts: list[DailyRentalCount]) -> list[DailyRentalCountDTO]:
        return [
            DailyRentalCountDTO(day=entry.day.isoformat(), count=entry.count) for entry in counts
        ]
