from __future__ import annotations

from abc import ABC, abstractmethod

from car_rental_admin.domain.car import Car, CarStatus, Category


class CarRepository(ABC):
    """
    Port for car and category data access.

    Cars and categories are returned as immutable snapshots; state changes
    are persisted by saving a new snapshot.
    """

    @abstractmethod
    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Car | None:
        """
        Load a car by id.

        Args:
            car_id: Car identifier
            for_update: Lock the car record for the rest of the current
                        transaction (implementations without transactions ignore it)

        Returns:
            Car snapshot if found, None otherwise
        """
        ...

    @abstractmethod
    def get_category(self, category_id: int) -> Category | None: ...

    @abstractmethod
    def list_by_status(self, status: CarStatus) -> list[Car]:
        """Cars in the given status, ordered by id."""
        ...

    @abstractmethod
    def save(self, car: Car) -> Car: ...
