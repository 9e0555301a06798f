"""
Unit tests for FastAPI application setup and configuration.

This test suite verifies the application structure and wiring:
- build_app() creates properly configured FastAPI instance
- Application metadata (title, version, docs URLs)
- Router registration (health unprefixed, business routers under /v1)
- OpenAPI schema generation

Nothing here touches the database: routes are inspected through the
OpenAPI schema, which does not resolve dependencies.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_rental_admin.entrypoints.http.app import build_app


@pytest.fixture(scope="module")
def schema() -> dict:
    return build_app().openapi()


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_fastapi_instance() -> None:
    assert isinstance(build_app(), FastAPI)


def test_build_app_creates_new_instance_each_call() -> None:
    """build_app() creates a new app instance for each call (not cached)."""
    assert build_app() is not build_app()


# ==============================================================================
# Application Metadata
# ==============================================================================


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Car Rental Admin API"
    assert app.version == "0.1.0"
    assert "Back-office API for a car rental fleet" in app.description


def test_app_documentation_urls() -> None:
    app = build_app()

    assert app.docs_url == "/docs"
    assert app.redoc_url == "/redoc"
    assert app.openapi_url == "/openapi.json"


def test_app_documentation_endpoints_are_accessible() -> None:
    client = TestClient(build_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    response = client.get("/openapi.json")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"


# ==============================================================================
# Router Registration
# ==============================================================================


@pytest.mark.parametrize(
    ("path", "method"),
    [
        ("/v1/rentals", "post"),
        ("/v1/rentals", "get"),
        ("/v1/rentals/price-preview", "post"),
        ("/v1/rentals/overdue", "get"),
        ("/v1/rentals/{rental_id}", "get"),
        ("/v1/rentals/{rental_id}", "put"),
        ("/v1/rentals/{rental_id}/extend", "post"),
        ("/v1/rentals/{rental_id}/return", "post"),
        ("/v1/rentals/{rental_id}/cancel", "post"),
        ("/v1/cars/available", "get"),
        ("/v1/cars/{car_id}/availability", "get"),
        ("/v1/cars/{car_id}/rentals", "get"),
        ("/v1/customers/{customer_id}/rentals", "get"),
        ("/v1/customers/inactive-reminders", "post"),
        ("/v1/dashboard/summary", "get"),
        ("/v1/dashboard/rentals-per-day", "get"),
    ],
)
def test_business_routes_are_versioned(schema: dict, path: str, method: str) -> None:
    assert method in schema["paths"][path]


def test_business_routes_are_not_served_unprefixed(schema: dict) -> None:
    assert "/rentals" not in schema["paths"]
    assert "/cars/available" not in schema["paths"]


def test_openapi_schema_documents_health_endpoint(schema: dict) -> None:
    health = schema["paths"]["/health"]["get"]

    assert "health" in health["tags"]


def test_openapi_schema_documents_rental_creation(schema: dict) -> None:
    create = schema["paths"]["/v1/rentals"]["post"]

    assert create["tags"] == ["Rentals"]
    assert create["summary"] == "Book a car"
    assert {"201", "400", "404", "409", "422"} <= set(create["responses"])


def test_openapi_schema_documents_availability_query(schema: dict) -> None:
    available = schema["paths"]["/v1/cars/available"]["get"]

    assert available["tags"] == ["Cars"]
    param_names = [p["name"] for p in available["parameters"]]
    assert "start_at" in param_names
    assert "end_at" in param_names


def test_openapi_schema_exposes_status_filter_alias(schema: dict) -> None:
    params = schema["paths"]["/v1/rentals"]["get"]["parameters"]

    assert [p["name"] for p in params] == ["status"]


# ==============================================================================
# Route Accessibility
# ==============================================================================


def test_health_endpoint_responds() -> None:
    response = TestClient(build_app()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_app_returns_404_for_unknown_routes() -> None:
    client = TestClient(build_app())

    assert client.get("/unknown").status_code == 404
    assert client.get("/v1/unknown").status_code == 404


def test_module_level_app_is_from_build_app() -> None:
    from car_rental_admin.entrypoints.http.app import app

    assert isinstance(app, FastAPI)
    assert app.title == "Car Rental Admin API"
