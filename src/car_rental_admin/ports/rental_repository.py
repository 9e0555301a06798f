from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from car_rental_admin.domain.rental import Rental, RentalStatus


class RentalRepository(ABC):
    """
    Port for rental data access.

    Contract:
        - Time windows passed to queries are pre-validated by the caller (UseCase)
        - Listing queries by car, customer and status return the most recent
          rental first (start_at descending)
        - Overdue queries return the soonest-overdue rental first
          (planned_end_at ascending)
    """

    @abstractmethod
    def get_by_id(self, rental_id: int) -> Rental | None: ...

    @abstractmethod
    def save(self, rental: Rental) -> Rental:
        """
        Insert or update a rental.

        A rental without id is inserted and returned with its assigned id.
        """
        ...

    @abstractmethod
    def list_all(self) -> list[Rental]:
        """All rentals ordered by id."""
        ...

    @abstractmethod
    def find_by_status(self, status: RentalStatus) -> list[Rental]: ...

    @abstractmethod
    def find_by_car(self, car_id: int) -> list[Rental]: ...

    @abstractmethod
    def find_by_customer(self, customer_id: int) -> list[Rental]: ...

    @abstractmethod
    def find_active_overlapping(
        self, start: datetime, end: datetime, car_id: int | None = None
    ) -> list[Rental]:
        """
        ACTIVE rentals whose [start_at, planned_end_at) overlaps [start, end).

        Args:
            start: Window start (inclusive)
            end: Window end (exclusive)
            car_id: Restrict to one car when given
        """
        ...

    @abstractmethod
    def find_overdue(self, now: datetime) -> list[Rental]:
        """ACTIVE rentals with planned_end_at before now."""
        ...

    @abstractmethod
    def count_by_customer(self, customer_id: int) -> int: ...

    @abstractmethod
    def last_rental_end_for_customer(self, customer_id: int) -> datetime | None:
        """Latest actual_return_at (or planned_end_at when not returned) of the customer."""
        ...

    @abstractmethod
    def count_by_status(self, status: RentalStatus) -> int: ...

    @abstractmethod
    def count_overdue(self, now: datetime) -> int: ...

    @abstractmethod
    def count_started_between(self, start: datetime, end: datetime) -> int:
        """Rentals with start <= start_at < end."""
        ...

    @abstractmethod
    def sum_revenue_between(self, start: datetime, end: datetime) -> Decimal:
        """Total price of RETURNED rentals with start <= actual_return_at < end."""
        ...
