"""
Test suite for the /v1/rentals routes.

Routes run against a real RentalLifecycle over in-memory repositories and a
fixed clock, so each test exercises request parsing, the lifecycle rules
and the response mapping together:
- Booking, quoting, extending, updating, returning and cancelling
- Domain errors surface with the right HTTP status and error code
- Money is returned as decimal strings
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_rental_admin.adapters.in_memory_car_repository import InMemoryCarRepository
from car_rental_admin.adapters.in_memory_customer_repository import InMemoryCustomerRepository
from car_rental_admin.adapters.in_memory_rental_repository import InMemoryRentalRepository
from car_rental_admin.domain.car import CarStatus
from car_rental_admin.entrypoints.http.dependencies import get_clock, get_rental_lifecycle
from car_rental_admin.entrypoints.http.exception_handlers import register_exception_handlers
from car_rental_admin.entrypoints.http.routes.rentals import router
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle


@pytest.fixture
def lifecycle(
    car_repository: InMemoryCarRepository,
    rental_repository: InMemoryRentalRepository,
    customer_repository: InMemoryCustomerRepository,
    now: datetime,
) -> RentalLifecycle:
    return RentalLifecycle(
        car_repository=car_repository,
        rental_repository=rental_repository,
        customer_repository=customer_repository,
        late_fee_percent=Decimal("100"),
        clock=lambda: now,
    )


@pytest.fixture
def app(lifecycle: RentalLifecycle, now: datetime) -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_rental_lifecycle] = lambda: lifecycle
    test_app.dependency_overrides[get_clock] = lambda: (lambda: now)
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def _booking(**overrides) -> dict:
    payload = {
        "customer_id": 1,
        "car_id": 1,
        "rate_type": "DAILY",
        "start_at": "2026-03-05T09:00:00Z",
        "planned_end_at": "2026-03-07T09:00:00Z",
    }
    payload.update(overrides)
    return payload


def _book(client: TestClient, **overrides) -> dict:
    response = client.post("/v1/rentals", json=_booking(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


# ==============================================================================
# POST /v1/rentals
# ==============================================================================


def test_create_rental_returns_201_with_price(
    client: TestClient, car_repository: InMemoryCarRepository
) -> None:
    response = client.post("/v1/rentals", json=_booking(notes="Child seat"))

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 1
    assert data["status"] == "ACTIVE"
    assert data["is_overdue"] is False
    assert data["rate_type"] == "DAILY"
    # 2 days * 100.00 with the 5% economy daily discount
    assert data["base_price"] == "190.00"
    assert data["late_fee"] == "0.00"
    assert data["total_price"] == "190.00"
    assert data["notes"] == "Child seat"
    assert data["actual_return_at"] is None
    assert car_repository.get_by_id(1).status == CarStatus.RENTED


def test_create_rental_accepts_lowercase_rate_type(client: TestClient) -> None:
    data = _book(client, rate_type="hourly", planned_end_at="2026-03-05T11:30:00Z")

    assert data["rate_type"] == "HOURLY"
    assert data["base_price"] == "90.00"


def test_create_rental_treats_naive_timestamps_as_utc(client: TestClient) -> None:
    data = _book(client, start_at="2026-03-05T09:00:00", planned_end_at="2026-03-07T09:00:00")

    assert data["start_at"] == "2026-03-05T09:00:00Z"


def test_overlapping_booking_returns_409(client: TestClient) -> None:
    _book(client)

    response = client.post(
        "/v1/rentals",
        json=_booking(customer_id=2, start_at="2026-03-06T09:00:00Z", planned_end_at="2026-03-08T09:00:00Z"),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "CAR_UNAVAILABLE"


def test_back_to_back_booking_is_accepted(client: TestClient) -> None:
    _book(client)

    data = _book(
        client, customer_id=2, start_at="2026-03-07T09:00:00Z", planned_end_at="2026-03-08T09:00:00Z"
    )

    assert data["id"] == 2


def test_booking_car_in_maintenance_returns_409(client: TestClient) -> None:
    response = client.post("/v1/rentals", json=_booking(car_id=3))

    assert response.status_code == 409
    assert response.json()["code"] == "CAR_UNAVAILABLE"


@pytest.mark.parametrize(
    ("overrides", "resource"),
    [({"customer_id": 99}, "Customer"), ({"car_id": 99}, "Car")],
)
def test_booking_unknown_entities_returns_404(
    client: TestClient, overrides: dict, resource: str
) -> None:
    response = client.post("/v1/rentals", json=_booking(**overrides))

    assert response.status_code == 404
    assert response.json() == {
        "detail": f"{resource} with identifier '99' not found",
        "code": "NOT_FOUND",
    }


def test_unsupported_rate_type_returns_400(client: TestClient) -> None:
    response = client.post("/v1/rentals", json=_booking(rate_type="MONTHLY"))

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Unsupported rate type: MONTHLY",
        "code": "INVALID_RATE_TYPE",
    }


def test_end_before_start_returns_422(client: TestClient) -> None:
    response = client.post("/v1/rentals", json=_booking(planned_end_at="2026-03-05T08:00:00Z"))

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_WINDOW"


def test_missing_field_returns_422(client: TestClient) -> None:
    payload = _booking()
    del payload["planned_end_at"]

    response = client.post("/v1/rentals", json=payload)

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "planned_end_at"


# ==============================================================================
# POST /v1/rentals/price-preview
# ==============================================================================


def test_price_preview_has_no_side_effects(
    client: TestClient, rental_repository: InMemoryRentalRepository
) -> None:
    response = client.post(
        "/v1/rentals/price-preview",
        json={
            "car_id": 1,
            "rate_type": "DAILY",
            "start_at": "2026-03-05T09:00:00Z",
            "planned_end_at": "2026-03-07T09:00:00Z",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "car_id": 1,
        "rate_type": "DAILY",
        "price": "190.00",
        "discount_percent": "5",
    }
    assert rental_repository.list_all() == []


def test_price_preview_weekly_without_discount(client: TestClient) -> None:
    response = client.post(
        "/v1/rentals/price-preview",
        json={
            "car_id": 2,
            "rate_type": "WEEKLY",
            "start_at": "2026-03-05T09:00:00Z",
            "planned_end_at": "2026-03-12T09:00:00Z",
        },
    )

    assert response.json()["price"] == "1400.00"
    assert response.json()["discount_percent"] == "0"


# ==============================================================================
# GET /v1/rentals
# ==============================================================================


def test_get_rental_by_id(client: TestClient) -> None:
    created = _book(client)

    response = client.get(f"/v1/rentals/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_rental_returns_404(client: TestClient) -> None:
    response = client.get("/v1/rentals/42")

    assert response.status_code == 404
    assert response.json()["detail"] == "Rental with identifier '42' not found"


def test_list_rentals_with_and_without_status(client: TestClient) -> None:
    first = _book(client)
    _book(client, car_id=2)
    client.post(f"/v1/rentals/{first['id']}/cancel")

    all_rentals = client.get("/v1/rentals").json()
    active = client.get("/v1/rentals", params={"status": "active"}).json()

    assert all_rentals["total"] == 2
    assert [r["id"] for r in all_rentals["rentals"]] == [1, 2]
    assert [r["id"] for r in active["rentals"]] == [2]


def test_list_rentals_unknown_status_returns_422(client: TestClient) -> None:
    response = client.get("/v1/rentals", params={"status": "LOST"})

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["code"] == "INVALID_STATUS"


def test_overdue_rentals_are_projected(client: TestClient) -> None:
    # Clock is 2026-03-04 12:00, this rental was due the day before
    late = _book(client, start_at="2026-03-01T09:00:00Z", planned_end_at="2026-03-03T09:00:00Z")
    _book(client, car_id=2)

    overdue = client.get("/v1/rentals/overdue").json()
    by_status = client.get("/v1/rentals", params={"status": "OVERDUE"}).json()

    assert [r["id"] for r in overdue["rentals"]] == [late["id"]]
    assert overdue["rentals"][0]["status"] == "ACTIVE"
    assert overdue["rentals"][0]["is_overdue"] is True
    assert by_status == overdue


# ==============================================================================
# Extend / update
# ==============================================================================


def test_extend_rental_reprices_whole_window(client: TestClient) -> None:
    created = _book(client)

    response = client.post(
        f"/v1/rentals/{created['id']}/extend",
        json={"new_planned_end_at": "2026-03-08T09:00:00Z"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["planned_end_at"] == "2026-03-08T09:00:00Z"
    assert data["base_price"] == "285.00"
    assert data["total_price"] == "285.00"


def test_extend_into_next_booking_returns_409(client: TestClient) -> None:
    created = _book(client)
    _book(client, customer_id=2, start_at="2026-03-07T09:00:00Z", planned_end_at="2026-03-09T09:00:00Z")

    response = client.post(
        f"/v1/rentals/{created['id']}/extend",
        json={"new_planned_end_at": "2026-03-08T09:00:00Z"},
    )

    assert response.status_code == 409
    assert response.json()["code"] == "CAR_UNAVAILABLE"


def test_extend_backwards_returns_422(client: TestClient) -> None:
    created = _book(client)

    response = client.post(
        f"/v1/rentals/{created['id']}/extend",
        json={"new_planned_end_at": "2026-03-06T09:00:00Z"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_WINDOW"


def test_update_rental_changes_rate_type_and_notes(client: TestClient) -> None:
    created = _book(client, notes="old")

    response = client.put(
        f"/v1/rentals/{created['id']}",
        json={"planned_end_at": "2026-03-12T09:00:00Z", "rate_type": "WEEKLY", "notes": "new"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["rate_type"] == "WEEKLY"
    # 1 week * 500.00 with the 10% economy weekly discount
    assert data["base_price"] == "450.00"
    assert data["notes"] == "new"


# ==============================================================================
# Return / cancel
# ==============================================================================


def test_return_late_adds_late_fee(
    client: TestClient, car_repository: InMemoryCarRepository
) -> None:
    created = _book(client)

    response = client.post(
        f"/v1/rentals/{created['id']}/return",
        json={"actual_return_at": "2026-03-07T11:30:00Z", "new_mileage_km": 12480},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "RETURNED"
    assert data["actual_return_at"] == "2026-03-07T11:30:00Z"
    # 2.5 hours late, billed as 3 started hours at 30.00
    assert data["late_fee"] == "90.00"
    assert data["total_price"] == "280.00"

    car = car_repository.get_by_id(1)
    assert car.status == CarStatus.AVAILABLE
    assert car.mileage_km == 12480


def test_return_without_body_uses_clock(client: TestClient, now: datetime) -> None:
    created = _book(client, start_at="2026-03-04T09:00:00Z", planned_end_at="2026-03-05T09:00:00Z")

    response = client.post(f"/v1/rentals/{created['id']}/return")

    assert response.status_code == 200
    data = response.json()
    assert data["actual_return_at"] == "2026-03-04T12:00:00Z"
    assert data["late_fee"] == "0.00"


def test_return_twice_returns_409(client: TestClient) -> None:
    created = _book(client)
    client.post(f"/v1/rentals/{created['id']}/return", json={"actual_return_at": "2026-03-06T09:00:00Z"})

    response = client.post(f"/v1/rentals/{created['id']}/return")

    assert response.status_code == 409
    assert response.json() == {
        "detail": "Cannot return a rental in status RETURNED",
        "code": "INVALID_STATE",
    }


def test_cancel_rental_releases_car(
    client: TestClient, car_repository: InMemoryCarRepository
) -> None:
    created = _book(client)

    response = client.post(f"/v1/rentals/{created['id']}/cancel")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "CANCELLED"
    assert data["total_price"] == "190.00"
    assert data["actual_return_at"] is None
    assert car_repository.get_by_id(1).status == CarStatus.AVAILABLE


def test_cancel_missing_rental_returns_404(client: TestClient) -> None:
    assert client.post("/v1/rentals/5/cancel").status_code == 404
