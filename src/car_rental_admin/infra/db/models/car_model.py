from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from car_rental_admin.infra.db.models.base import Base, TimestampMixin


class CarModelRow(TimestampMixin, Base):
    __tablename__ = "car_models"
    __table_args__ = (UniqueConstraint("brand", "name", name="uq_car_models_brand_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
