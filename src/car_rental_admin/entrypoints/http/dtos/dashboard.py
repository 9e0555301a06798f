from pydantic import BaseModel, ConfigDict, Field


class DashboardSummaryResponseDTO(BaseModel):
    """Rental activity for today and the current week (Monday start)."""

    rentals_today: int = Field(description="Rentals starting today")
    rentals_this_week: int = Field(description="Rentals starting this week")
    active_rentals: int
    overdue_rentals: int
    revenue_today: str = Field(description="Total price of rentals returned today")
    revenue_this_week: str = Field(description="Total price of rentals returned this week")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rentals_today": 4,
                "rentals_this_week": 17,
                "active_rentals": 9,
                "overdue_rentals": 1,
                "revenue_today": "820.00",
                "revenue_this_week": "5310.50",
            }
        }
    )


class DailyRentalCountDTO(BaseModel):
    day: str = Field(description="Calendar day (YYYY-MM-DD)")
    count: int = Field(description="Rentals starting that day")

    model_config = ConfigDict(json_schema_extra={"example": {"day": "2026-03-04", "count": 5}})
