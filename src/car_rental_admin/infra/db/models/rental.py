from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from car_rental_admin.infra.db.models.base import Base, TimestampMixin


class RentalRow(TimestampMixin, Base):
    __tablename__ = "rentals"
    __table_args__ = (
        CheckConstraint("start_at < planned_end_at", name="ck_rentals_window"),
        CheckConstraint(
            "total_price = base_price + late_fee", name="ck_rentals_total_price"
        ),
        Index("ix_rentals_car_status", "car_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Cars and customers with rental history cannot be deleted
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    car_id: Mapped[int] = mapped_column(
        ForeignKey("cars.id", ondelete="RESTRICT"), nullable=False
    )

    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    planned_end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    actual_return_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # HOURLY | DAILY | WEEKLY
    rate_type: Mapped[str] = mapped_column(String(10), nullable=False)
    # ACTIVE | RETURNED | CANCELLED (OVERDUE is derived, never stored)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    base_price: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    late_fee: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
