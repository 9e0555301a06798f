"""Shared fleet fixtures: a small catalog, customers and a fixed clock."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from car_rental_admin.adapters.in_memory_car_repository import InMemoryCarRepository
from car_rental_admin.adapters.in_memory_customer_repository import InMemoryCustomerRepository
from car_rental_admin.adapters.in_memory_rental_repository import InMemoryRentalRepository
from car_rental_admin.domain.car import Car, CarStatus, Category
from car_rental_admin.domain.customer import Customer

NOW = datetime(2026, 3, 4, 12, 0, tzinfo=timezone.utc)  # Wednesday


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def economy() -> Category:
    return Category(
        id=1,
        name="Economy",
        daily_discount_percent=Decimal("5"),
        weekly_discount_percent=Decimal("10"),
    )


@pytest.fixture()
def premium() -> Category:
    return Category(id=2, name="Premium")


@pytest.fixture()
def panda(economy: Category) -> Car:
    return Car(
        id=1,
        vin="ZFA31200000123456",
        license_plate="WX-1001",
        production_year=2023,
        model_id=1,
        category_id=economy.id,
        hourly_rate=Decimal("30.00"),
        daily_rate=Decimal("100.00"),
        weekly_rate=Decimal("500.00"),
        mileage_km=12000,
    )


@pytest.fixture()
def audi(premium: Category) -> Car:
    return Car(
        id=2,
        vin="WAUZZZ4G0EN123456",
        license_plate="WX-2002",
        production_year=2024,
        model_id=2,
        category_id=premium.id,
        hourly_rate=Decimal("45.00"),
        daily_rate=Decimal("250.00"),
        weekly_rate=Decimal("1400.00"),
    )


@pytest.fixture()
def workshop_car(economy: Category) -> Car:
    return Car(
        id=3,
        vin="ZFA31200000999999",
        license_plate="WX-3003",
        production_year=2019,
        model_id=1,
        category_id=economy.id,
        hourly_rate=Decimal("25.00"),
        daily_rate=Decimal("90.00"),
        weekly_rate=Decimal("450.00"),
        status=CarStatus.MAINTENANCE,
    )


@pytest.fixture()
def alice() -> Customer:
    return Customer(id=1, first_name="Alice", last_name="Nowak", email="alice@example.com")


@pytest.fixture()
def bob() -> Customer:
    return Customer(id=2, first_name="Bob", last_name="Weber", email="bob@example.com")


@pytest.fixture()
def car_repository(
    panda: Car, audi: Car, workshop_car: Car, economy: Category, premium: Category
) -> InMemoryCarRepository:
    return InMemoryCarRepository(cars=[panda, audi, workshop_car], categories=[economy, premium])


@pytest.fixture()
def rental_repository() -> InMemoryRentalRepository:
    return InMemoryRentalRepository()


@pytest.fixture()
def customer_repository(alice: Customer, bob: Customer) -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository(customers=[alice, bob])
