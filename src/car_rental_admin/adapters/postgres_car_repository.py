"""PostgreSQL implementation of CarRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_rental_admin.domain.car import Car, CarStatus, Category
from car_rental_admin.infra.db.models.car import CarRow
from car_rental_admin.infra.db.models.category import CategoryRow
from car_rental_admin.ports.car_repository import CarRepository


class PostgresCarRepository(CarRepository):
    """
    PostgreSQL implementation of CarRepository.

    - get_by_id(for_update=True) issues SELECT ... FOR UPDATE, so concurrent
      bookings of the same car serialize on the row until the session commits
    - save() updates the row in place and flushes within the caller's transaction
    - Converts CarRow/CategoryRow (infrastructure) to Car/Category (domain)
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Car | None:
        query = select(CarRow).where(CarRow.id == car_id)
        if for_update:
            query = query.with_for_update()

        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_category(self, category_id: int) -> Category | None:
        query = select(CategoryRow).where(CategoryRow.id == category_id)
        row = self._session.execute(query).scalar_one_or_none()
        return self._category_to_domain(row) if row else None

    def list_by_status(self, status: CarStatus) -> list[Car]:
        query = select(CarRow).where(CarRow.status == status.value).order_by(CarRow.id)
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def save(self, car: Car) -> Car:
        row = self._session.get(CarRow, car.id)
        if row is None:
            row = CarRow(id=car.id)
            self._session.add(row)

        row.vin = car.vin
        row.license_plate = car.license_plate
        row.production_year = car.production_year
        row.color = car.color
        row.status = car.status.value
        row.model_id = car.model_id
        row.category_id = car.category_id
        row.hourly_rate = car.hourly_rate
        row.daily_rate = car.daily_rate
        row.weekly_rate = car.weekly_rate
        row.mileage_km = car.mileage_km

        self._session.flush()
        return car

    def _to_domain(self, row: CarRow) -> Car:
        return Car(
            id=row.id,
            vin=row.vin,
            license_plate=row.license_plate,
            production_year=row.production_year,
            model_id=row.model_id,
            category_id=row.category_id,
            hourly_rate=row.hourly_rate,  # Already Decimal from NUMERIC column
            daily_rate=row.daily_rate,
            weekly_rate=row.weekly_rate,
            status=CarStatus(row.status),
            color=row.color,
            mileage_km=row.mileage_km,
        )

    def _category_to_domain(self, row: CategoryRow) -> Category:
        return Category(
            id=row.id,
            name=row.name,
            description=row.description,
            daily_discount_percent=row.daily_discount_percent,
            weekly_discount_percent=row.weekly_discount_percent,
        )
