from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_rental_admin.domain.customer import Customer
from car_rental_admin.infra.db.models.customer import CustomerRow
from car_rental_admin.ports.customer_repository import CustomerRepository


class PostgresCustomerRepository(CustomerRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, customer_id: int) -> Customer | None:
        query = select(CustomerRow).where(CustomerRow.id == customer_id)
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Customer]:
        rows = self._session.execute(select(CustomerRow).order_by(CustomerRow.id)).scalars().all()
        return [self._to_domain(row) for row in rows]

    def _to_domain(self, row: CustomerRow) -> Customer:
        return Customer(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            phone=row.phone,
        )
