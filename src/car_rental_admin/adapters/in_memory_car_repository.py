from __future__ import annotations

from car_rental_admin.domain.car import Car, CarStatus, Category
from car_rental_admin.ports.car_repository import CarRepository


class InMemoryCarRepository(CarRepository):
    """
    Canonical contract implementation for tests.

    - Stores cars and categories keyed by id
    - save() replaces the stored snapshot
    - for_update is a no-op (no transactions)
    """

    def __init__(self, cars: list[Car], categories: list[Category]) -> None:
        self._cars = {car.id: car for car in cars}
        self._categories = {category.id: category for category in categories}

    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Car | None:
        return self._cars.get(car_id)

    def get_category(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    def list_by_status(self, status: CarStatus) -> list[Car]:
        return sorted(
            (car for car in self._cars.values() if car.status == status),
            key=lambda car: car.id,
        )

    def save(self, car: Car) -> Car:
        self._cars[car.id] = car
        return car
