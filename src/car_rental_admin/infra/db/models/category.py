from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from car_rental_admin.infra.db.models.base import Base, TimestampMixin


class CategoryRow(TimestampMixin, Base):
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint(
            "daily_discount_percent BETWEEN 0 AND 100",
            name="ck_categories_daily_discount_range",
        ),
        CheckConstraint(
            "weekly_discount_percent BETWEEN 0 AND 100",
            name="ck_categories_weekly_discount_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Percentages, NULL means no discount
    daily_discount_percent: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=5, scale=2), nullable=True
    )
    weekly_discount_percent: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=5, scale=2), nullable=True
    )
