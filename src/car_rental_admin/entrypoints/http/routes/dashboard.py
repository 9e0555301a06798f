from fastapi import APIRouter, Depends, Query

from car_rental_admin.entrypoints.http.dependencies import get_dashboard_summary_use_case
from car_rental_admin.entrypoints.http.dtos.dashboard import (
    DailyRentalCountDTO,
    DashboardSummaryResponseDTO,
)
from car_rental_admin.entrypoints.http.mappers.dashboard_mapper import DashboardMapper
from car_rental_admin.use_cases.get_dashboard_summary import DEFAULT_DAYS_BACK, GetDashboardSummary

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/dashboard/summary",
    response_model=DashboardSummaryResponseDTO,
    summary="Rental activity summary",
)
def get_dashboard_summary(
    use_case: GetDashboardSummary = Depends(get_dashboard_summary_use_case),
) -> DashboardSummaryResponseDTO:
    return DashboardMapper.to_response(use_case.execute())


@router.get(
    "/dashboard/rentals-per-day",
    response_model=list[DailyRentalCountDTO],
    summary="Rentals started per day",
)
def get_rentals_per_day(
    days: int = Query(
        default=DEFAULT_DAYS_BACK,
        description="Number of days back, today included; values below 1 mean a week",
    ),
    use_case: GetDashboardSummary = Depends(get_dashboard_summary_use_case),
) -> list[DailyRentalCountDTO]:
    return DashboardMapper.to_daily_counts(use_case.rentals_per_day(days))
