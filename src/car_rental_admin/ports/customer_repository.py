from __future__ import annotations

from abc import ABC, abstractmethod

from car_rental_admin.domain.customer import Customer


class CustomerRepository(ABC):
    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None: ...

    @abstractmethod
    def list_all(self) -> list[Customer]: ...
