from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_rental_admin.adapters.in_memory_car_repository import InMemoryCarRepository
from car_rental_admin.adapters.in_memory_customer_repository import InMemoryCustomerRepository
from car_rental_admin.adapters.in_memory_rental_repository import InMemoryRentalRepository
from car_rental_admin.domain.rental import RateType, Rental
from car_rental_admin.entrypoints.http.dependencies import (
    get_clock,
    get_remind_inactive_customers_use_case,
    get_rental_lifecycle,
)
from car_rental_admin.entrypoints.http.exception_handlers import register_exception_handlers
from car_rental_admin.entrypoints.http.routes.customers import router
from car_rental_admin.use_cases.remind_inactive_customers import (
    RemindInactiveCustomers,
    RemindInactiveCustomersResponse,
)
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle


@pytest.fixture
def mock_reminders() -> Mock:
    return Mock(spec=RemindInactiveCustomers)


@pytest.fixture
def app(
    car_repository: InMemoryCarRepository,
    rental_repository: InMemoryRentalRepository,
    customer_repository: InMemoryCustomerRepository,
    mock_reminders: Mock,
    now: datetime,
) -> FastAPI:
    rental_repository.save(
        Rental(
            customer_id=1,
            car_id=2,
            start_at=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
            planned_end_at=datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc),
            rate_type=RateType.DAILY,
            base_price=Decimal("250.00"),
            total_price=Decimal("250.00"),
        )
    )
    lifecycle = RentalLifecycle(car_repository, rental_repository, customer_repository)

    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_rental_lifecycle] = lambda: lifecycle
    test_app.dependency_overrides[get_clock] = lambda: (lambda: now)
    test_app.dependency_overrides[get_remind_inactive_customers_use_case] = lambda: mock_reminders
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def test_customer_rentals(client: TestClient) -> None:
    response = client.get("/v1/customers/1/rentals")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["rentals"][0]["car_id"] == 2
    # Clock is 2026-03-04 12:00, planned end was the day before
    assert data["rentals"][0]["is_overdue"] is True


def test_customer_without_rentals(client: TestClient) -> None:
    response = client.get("/v1/customers/2/rentals")

    assert response.json() == {"rentals": [], "total": 0}


def test_unknown_customer_returns_404(client: TestClient) -> None:
    response = client.get("/v1/customers/99/rentals")

    assert response.status_code == 404
    assert response.json()["detail"] == "Customer with identifier '99' not found"


def test_inactive_reminders_report_reminded_customers(
    client: TestClient, mock_reminders: Mock
) -> None:
    mock_reminders.execute.return_value = RemindInactiveCustomersResponse(
        reminded_customer_ids=[2, 5]
    )

    response = client.post("/v1/customers/inactive-reminders")

    assert response.status_code == 200
    assert response.json() == {"reminded_customer_ids": [2, 5], "total": 2}
    mock_reminders.execute.assert_called_once_with()
