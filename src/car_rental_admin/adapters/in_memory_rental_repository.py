from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from car_rental_admin.domain.rental import Rental, RentalStatus, TimeWindow
from car_rental_admin.ports.rental_repository import RentalRepository


class InMemoryRentalRepository(RentalRepository):
    """
    Canonical contract implementation for tests.

    - Assigns increasing integer ids on first save
    - Listing by car/customer/status: most recent start first
    - Overdue listing: soonest planned end first
    """

    def __init__(self, rentals: list[Rental] | None = None) -> None:
        self._rentals: dict[int, Rental] = {}
        for rental in rentals or []:
            if rental.id is None:
                raise ValueError("Seeded rentals must have an id")
            self._rentals[rental.id] = rental

        self._ids = itertools.count(max(self._rentals, default=0) + 1)

    def get_by_id(self, rental_id: int) -> Rental | None:
        return self._rentals.get(rental_id)

    def save(self, rental: Rental) -> Rental:
        rental_id = rental.id if rental.id is not None else next(self._ids)
        rental = replace(rental, id=rental_id)
        self._rentals[rental_id] = rental
        return rental

    def list_all(self) -> list[Rental]:
        return sorted(self._rentals.values(), key=lambda rental: rental.id or 0)

    def find_by_status(self, status: RentalStatus) -> list[Rental]:
        return self._most_recent_first(r for r in self._rentals.values() if r.status == status)

    def find_by_car(self, car_id: int) -> list[Rental]:
        return self._most_recent_first(r for r in self._rentals.values() if r.car_id == car_id)

    def find_by_customer(self, customer_id: int) -> list[Rental]:
        return self._most_recent_first(
            r for r in self._rentals.values() if r.customer_id == customer_id
        )

    def find_active_overlapping(
        self, start: datetime, end: datetime, car_id: int | None = None
    ) -> list[Rental]:
        # Trust that UseCase has validated the window (contract programming)
        window = TimeWindow(start, end)
        return [
            rental
            for rental in self.list_all()
            if rental.is_active
            and (car_id is None or rental.car_id == car_id)
            and rental.window.overlaps(window)
        ]

    def find_overdue(self, now: datetime) -> list[Rental]:
        overdue = [rental for rental in self._rentals.values() if rental.is_overdue(now)]
        return sorted(overdue, key=lambda rental: rental.planned_end_at)

    def count_by_customer(self, customer_id: int) -> int:
        return sum(1 for r in self._rentals.values() if r.customer_id == customer_id)

    def last_rental_end_for_customer(self, customer_id: int) -> datetime | None:
        ends = [
            rental.actual_return_at or rental.planned_end_at
            for rental in self._rentals.values()
            if rental.customer_id == customer_id
        ]
        return max(ends, default=None)

    def count_by_status(self, status: RentalStatus) -> int:
        return sum(1 for r in self._rentals.values() if r.status == status)

    def count_overdue(self, now: datetime) -> int:
        return sum(1 for r in self._rentals.values() if r.is_overdue(now))

    def count_started_between(self, start: datetime, end: datetime) -> int:
        return sum(1 for r in self._rentals.values() if start <= r.start_at < end)

    def sum_revenue_between(self, start: datetime, end: datetime) -> Decimal:
        return sum(
            (
                rental.total_price
                for rental in self._rentals.values()
                if rental.status == RentalStatus.RETURNED
                and rental.actual_return_at is not None
                and start <= rental.actual_return_at < end
            ),
            Decimal("0.00"),
        )

    @staticmethod
    def _most_recent_first(rentals: Iterable[Rental]) -> list[Rental]:
        return sorted(rentals, key=lambda rental: rental.start_at, reverse=True)
