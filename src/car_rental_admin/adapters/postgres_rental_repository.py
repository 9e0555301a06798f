"""PostgreSQL implementation of RentalRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from car_rental_admin.domain.pricing import to_cents
from car_rental_admin.domain.rental import RateType, Rental, RentalStatus
from car_rental_admin.infra.db.models.rental import RentalRow
from car_rental_admin.ports.rental_repository import RentalRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


class PostgresRentalRepository(RentalRepository):
    """
    PostgreSQL implementation of RentalRepository.

    - Overlap and overdue predicates are evaluated in SQL
    - Aggregates (counts, revenue) use COUNT/SUM queries
    - save() flushes so newly inserted rentals get their id immediately
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, rental_id: int) -> Rental | None:
        query = select(RentalRow).where(RentalRow.id == rental_id)
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def save(self, rental: Rental) -> Rental:
        row = self._session.get(RentalRow, rental.id) if rental.id is not None else None
        if row is None:
            row = RentalRow()
            self._session.add(row)

        row.customer_id = rental.customer_id
        row.car_id = rental.car_id
        row.start_at = rental.start_at
        row.planned_end_at = rental.planned_end_at
        row.actual_return_at = rental.actual_return_at
        row.rate_type = rental.rate_type.value
        row.status = rental.status.value
        row.base_price = rental.base_price
        row.late_fee = rental.late_fee
        row.total_price = rental.total_price
        row.notes = rental.notes

        self._session.flush()
        return self._to_domain(row)

    def list_all(self) -> list[Rental]:
        return self._fetch(select(RentalRow).order_by(RentalRow.id))

    def find_by_status(self, status: RentalStatus) -> list[Rental]:
        return self._fetch(self._most_recent_first(RentalRow.status == status.value))

    def find_by_car(self, car_id: int) -> list[Rental]:
        return self._fetch(self._most_recent_first(RentalRow.car_id == car_id))

    def find_by_customer(self, customer_id: int) -> list[Rental]:
        return self._fetch(self._most_recent_first(RentalRow.customer_id == customer_id))

    def find_active_overlapping(
        self, start: datetime, end: datetime, car_id: int | None = None
    ) -> list[Rental]:
        # Half-open intervals: [start_at, planned_end_at) overlaps [start, end)
        query = select(RentalRow).where(
            RentalRow.status == RentalStatus.ACTIVE.value,
            RentalRow.start_at < end,
            RentalRow.planned_end_at > start,
        )
        if car_id is not None:
            query = query.where(RentalRow.car_id == car_id)

        return self._fetch(query.order_by(RentalRow.id))

    def find_overdue(self, now: datetime) -> list[Rental]:
        query = (
            select(RentalRow)
            .where(
                RentalRow.status == RentalStatus.ACTIVE.value,
                RentalRow.planned_end_at < now,
            )
            .order_by(RentalRow.planned_end_at)
        )
        return self._fetch(query)

    def count_by_customer(self, customer_id: int) -> int:
        return self._count(RentalRow.customer_id == customer_id)

    def last_rental_end_for_customer(self, customer_id: int) -> datetime | None:
        query = select(
            func.max(func.coalesce(RentalRow.actual_return_at, RentalRow.planned_end_at))
        ).where(RentalRow.customer_id == customer_id)
        return self._session.execute(query).scalar()

    def count_by_status(self, status: RentalStatus) -> int:
        return self._count(RentalRow.status == status.value)

    def count_overdue(self, now: datetime) -> int:
        return self._count(
            RentalRow.status == RentalStatus.ACTIVE.value,
            RentalRow.planned_end_at < now,
        )

    def count_started_between(self, start: datetime, end: datetime) -> int:
        return self._count(RentalRow.start_at >= start, RentalRow.start_at < end)

    def sum_revenue_between(self, start: datetime, end: datetime) -> Decimal:
        query = select(func.coalesce(func.sum(RentalRow.total_price), 0)).where(
            RentalRow.status == RentalStatus.RETURNED.value,
            RentalRow.actual_return_at >= start,
            RentalRow.actual_return_at < end,
        )
        total = self._session.execute(query).scalar() or 0
        return to_cents(Decimal(total))

    def _most_recent_first(self, *criteria) -> Select[tuple[RentalRow]]:
        return select(RentalRow).where(*criteria).order_by(RentalRow.start_at.desc())

    def _fetch(self, query: Select[tuple[RentalRow]]) -> list[Rental]:
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def _count(self, *criteria) -> int:
        query = select(func.count()).select_from(RentalRow).where(*criteria)
        return self._session.execute(query).scalar() or 0

    def _to_domain(self, row: RentalRow) -> Rental:
        return Rental(
            id=row.id,
            customer_id=row.customer_id,
            car_id=row.car_id,
            start_at=row.start_at,
            planned_end_at=row.planned_end_at,
            actual_return_at=row.actual_return_at,
            rate_type=RateType(row.rate_type),
            status=RentalStatus(row.status),
            base_price=row.base_price,
            late_fee=row.late_fee,
            total_price=row.total_price,
            notes=row.notes,
        )
