from fastapi import FastAPI

from car_rental_admin.entrypoints.http.exception_handlers import register_exception_handlers
from car_rental_admin.entrypoints.http.routes.cars import router as cars_router
from car_rental_admin.entrypoints.http.routes.customers import router as customers_router
from car_rental_admin.entrypoints.http.routes.dashboard import router as dashboard_router
from car_rental_admin.entrypoints.http.routes.health import router as health_router
from car_rental_admin.entrypoints.http.routes.rentals import router as rentals_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Car Rental Admin API",
        description="""
        Back-office API for a car rental fleet.

        ## Features
        - Book, extend, update, return and cancel rentals
        - Quote rental prices (hourly, daily, weekly rates)
        - Check car availability for a time window
        - Track overdue rentals and daily/weekly activity

        ## Money
        Amounts are sent and returned as decimal strings (e.g. "95.00").

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(rentals_router, prefix="/v1")
    app.include_router(cars_router, prefix="/v1")
    app.include_router(customers_router, prefix="/v1")
    app.include_router(dashboard_router, prefix="/v1")

    return app


app = build_app()
