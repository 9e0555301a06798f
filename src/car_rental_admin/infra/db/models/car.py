from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from car_rental_admin.infra.db.models.base import Base, TimestampMixin


class CarRow(TimestampMixin, Base):
    __tablename__ = "cars"
    __table_args__ = (
        CheckConstraint(
            "hourly_rate >= 0 AND daily_rate >= 0 AND weekly_rate >= 0",
            name="ck_cars_rates_non_negative",
        ),
        CheckConstraint("mileage_km >= 0", name="ck_cars_mileage_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vin: Mapped[str] = mapped_column(String(17), nullable=False, unique=True)
    license_plate: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    production_year: Mapped[int] = mapped_column(Integer, nullable=False)
    color: Mapped[str | None] = mapped_column(String(30), nullable=True)

    # AVAILABLE | RENTED | MAINTENANCE
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    model_id: Mapped[int] = mapped_column(
        ForeignKey("car_models.id", ondelete="RESTRICT"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    daily_rate: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    weekly_rate: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)

    mileage_km: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
