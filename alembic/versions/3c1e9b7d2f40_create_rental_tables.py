"""Create fleet and rental tables

Revision ID: 3c1e9b7d2f40
Revises:
Create Date: 2026-02-09 18:42:11.503217

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1e9b7d2f40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("daily_discount_percent", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("weekly_discount_percent", sa.Numeric(precision=5, scale=2), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "daily_discount_percent BETWEEN 0 AND 100",
            name="ck_categories_daily_discount_range",
        ),
        sa.CheckConstraint(
            "weekly_discount_percent BETWEEN 0 AND 100",
            name="ck_categories_weekly_discount_range",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "car_models",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("brand", "name", name="uq_car_models_brand_name"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "cars",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("vin", sa.String(length=17), nullable=False),
        sa.Column("license_plate", sa.String(length=20), nullable=False),
        sa.Column("production_year", sa.Integer(), nullable=False),
        sa.Column("color", sa.String(length=30), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("model_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("daily_rate", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("weekly_rate", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("mileage_km", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "hourly_rate >= 0 AND daily_rate >= 0 AND weekly_rate >= 0",
            name="ck_cars_rates_non_negative",
        ),
        sa.CheckConstraint("mileage_km >= 0", name="ck_cars_mileage_non_negative"),
        sa.ForeignKeyConstraint(["model_id"], ["car_models.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("vin"),
        sa.UniqueConstraint("license_plate"),
    )
    op.create_index("ix_cars_status", "cars", ["status"])
    op.create_index("ix_cars_category_id", "cars", ["category_id"])

    op.create_table(
        "rentals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("car_id", sa.Integer(), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("planned_end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("actual_return_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rate_type", sa.String(length=10), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("base_price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("late_fee", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("total_price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("start_at < planned_end_at", name="ck_rentals_window"),
        sa.CheckConstraint("total_price = base_price + late_fee", name="ck_rentals_total_price"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rentals_customer_id", "rentals", ["customer_id"])
    op.create_index("ix_rentals_status", "rentals", ["status"])
    op.create_index("ix_rentals_car_status", "rentals", ["car_id", "status"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_rentals_car_status", table_name="rentals")
    op.drop_index("ix_rentals_status", table_name="rentals")
    op.drop_index("ix_rentals_customer_id", table_name="rentals")
    op.drop_table("rentals")
    op.drop_index("ix_cars_category_id", table_name="cars")
    op.drop_index("ix_cars_status", table_name="cars")
    op.drop_table("cars")
    op.drop_table("customers")
    op.drop_table("car_models")
    op.drop_table("categories")
