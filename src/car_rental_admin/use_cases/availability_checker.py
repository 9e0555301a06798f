from __future__ import annotations

from datetime import datetime

from car_rental_admin.domain.car import Car, CarStatus
from car_rental_admin.domain.errors import NotFoundError
from car_rental_admin.domain.rental import TimeWindow
from car_rental_admin.ports.car_repository import CarRepository
from car_rental_admin.ports.rental_repository import RentalRepository

# A RENTED car may still take a booking that does not collide with its
# active rentals; any other non-AVAILABLE status blocks new bookings.
BOOKABLE_STATUSES = frozenset({CarStatus.AVAILABLE, CarStatus.RENTED})


class AvailabilityChecker:
    """
    Decides whether cars are free for a time window.

    A car is available for [start, end) iff its status is AVAILABLE and no
    ACTIVE rental of that car overlaps the window. Returned and cancelled
    rentals never block availability. Read-only: never mutates state.

    Booking is looser than availability: is_bookable also accepts a RENTED
    car whose active rentals leave the window free, so a back-to-back
    booking can succeed for a window where is_available returns False.
    """

    def __init__(
        self,
        car_repository: CarRepository,
        rental_repository: RentalRepository,
    ) -> None:
        self._car_repository = car_repository
        self._rental_repository = rental_repository

    def is_available(self, car_id: int, start: datetime, end: datetime) -> bool:
        """
        Check a single car for the window [start, end).

        Raises:
            InvalidWindow: If start is not before end
            NotFoundError: If the car doesn't exist
        """
        window = TimeWindow(start, end)
        window.validate()

        car = self._car_repository.get_by_id(car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=car_id)

        return car.status == CarStatus.AVAILABLE and not self.has_conflict(car.id, window)

    def find_available(self, start: datetime, end: datetime) -> set[Car]:
        """
        All cars available for the window [start, end).

        Raises:
            InvalidWindow: If start is not before end
        """
        window = TimeWindow(start, end)
        window.validate()

        busy_car_ids = {
            rental.car_id
            for rental in self._rental_repository.find_active_overlapping(window.start, window.end)
        }
        return {
            car
            for car in self._car_repository.list_by_status(CarStatus.AVAILABLE)
            if car.id not in busy_car_ids
        }

    def is_bookable(self, car: Car, window: TimeWindow) -> bool:
        """Whether a new rental of car may start for a pre-validated window."""
        return car.status in BOOKABLE_STATUSES and not self.has_conflict(car.id, window)

    def has_conflict(
        self, car_id: int, window: TimeWindow, exclude_rental_id: int | None = None
    ) -> bool:
        """Whether any ACTIVE rental of the car (other than the excluded one) overlaps window."""
        return any(
            rental.id != exclude_rental_id
            for rental in self._rental_repository.find_active_overlapping(
                window.start, window.end, car_id=car_id
            )
        )
