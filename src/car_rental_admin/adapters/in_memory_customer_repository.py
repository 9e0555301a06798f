from __future__ import annotations

from car_rental_admin.domain.customer import Customer
from car_rental_admin.ports.customer_repository import CustomerRepository


class InMemoryCustomerRepository(CustomerRepository):
    """Canonical contract implementation for tests (insertion order preserved)."""

    def __init__(self, customers: list[Customer]) -> None:
        self._customers = customers

    def get_by_id(self, customer_id: int) -> Customer | None:
        return next((c for c in self._customers if c.id == customer_id), None)

    def list_all(self) -> list[Customer]:
        return list(self._customers)
