"""
Dependency injection for FastAPI routes.

Key principle: Database sessions are per-request, never cached.
Only process-wide stateless (or self-synchronized) singletons use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from car_rental_admin.adapters.logging_customer_notifier import LoggingCustomerNotifier
from car_rental_admin.adapters.postgres_car_repository import PostgresCarRepository
from car_rental_admin.adapters.postgres_customer_repository import PostgresCustomerRepository
from car_rental_admin.adapters.postgres_rental_repository import PostgresRentalRepository
from car_rental_admin.domain.clock import Clock, utc_now
from car_rental_admin.domain.pricing import PricingStrategyFactory
from car_rental_admin.infra.config import inactive_customer_days, late_fee_percent
from car_rental_admin.infra.db.session import get_session
from car_rental_admin.use_cases.availability_checker import AvailabilityChecker
from car_rental_admin.use_cases.car_locks import CarLocks
from car_rental_admin.use_cases.get_dashboard_summary import GetDashboardSummary
from car_rental_admin.use_cases.remind_inactive_customers import RemindInactiveCustomers
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits when the request succeeds, rolls
    back on any exception and always closes the session.
    """
    with get_session() as session:
        yield session


def get_clock() -> Clock:
    return utc_now


@lru_cache
def get_car_locks() -> CarLocks:
    """One lock registry per process, shared by every request."""
    return CarLocks()


@lru_cache
def get_pricing_factory() -> PricingStrategyFactory:
    return PricingStrategyFactory()


def get_rental_lifecycle(
    db: Session = Depends(get_db),
    car_locks: CarLocks = Depends(get_car_locks),
    pricing_factory: PricingStrategyFactory = Depends(get_pricing_factory),
    clock: Clock = Depends(get_clock),
) -> RentalLifecycle:
    """
    Factory function that returns a RentalLifecycle bound to the request session.

    Repositories are fresh per request; locks and strategies are shared.
    """
    return RentalLifecycle(
        car_repository=PostgresCarRepository(session=db),
        rental_repository=PostgresRentalRepository(session=db),
        customer_repository=PostgresCustomerRepository(session=db),
        pricing_factory=pricing_factory,
        car_locks=car_locks,
        late_fee_percent=late_fee_percent(),
        clock=clock,
    )


def get_availability_checker(db: Session = Depends(get_db)) -> AvailabilityChecker:
    return AvailabilityChecker(
        car_repository=PostgresCarRepository(session=db),
        rental_repository=PostgresRentalRepository(session=db),
    )


def get_remind_inactive_customers_use_case(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> RemindInactiveCustomers:
    return RemindInactiveCustomers(
        customer_repository=PostgresCustomerRepository(session=db),
        rental_repository=PostgresRentalRepository(session=db),
        notifier=LoggingCustomerNotifier(),
        inactive_days=inactive_customer_days(),
        clock=clock,
    )


def get_dashboard_summary_use_case(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> GetDashboardSummary:
    return GetDashboardSummary(
        rental_repository=PostgresRentalRepository(session=db),
        clock=clock,
    )
