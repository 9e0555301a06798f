from fastapi import APIRouter, Depends

from car_rental_admin.domain.clock import Clock
from car_rental_admin.entrypoints.http.dependencies import (
    get_availability_checker,
    get_clock,
    get_rental_lifecycle,
)
from car_rental_admin.entrypoints.http.dtos.cars import (
    AvailabilityQueryDTO,
    AvailableCarsResponseDTO,
    CarAvailabilityResponseDTO,
)
from car_rental_admin.entrypoints.http.dtos.rentals import RentalListResponseDTO
from car_rental_admin.entrypoints.http.error_responses import ErrorResponse
from car_rental_admin.entrypoints.http.mappers.car_mapper import CarMapper
from car_rental_admin.entrypoints.http.mappers.rental_mapper import RentalMapper, as_utc
from car_rental_admin.use_cases.availability_checker import AvailabilityChecker
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle

router = APIRouter(tags=["Cars"])


@router.get(
    "/cars/available",
    response_model=AvailableCarsResponseDTO,
    summary="Available cars for a window",
    description="""
    Cars with status AVAILABLE and no ACTIVE rental overlapping [start_at, end_at).

    ## Example
    ```
    GET /v1/cars/available?start_at=2026-03-02T09:00:00Z&end_at=2026-03-04T09:00:00Z
    ```
    """,
    responses={422: {"model": ErrorResponse, "description": "end_at not after start_at"}},
)
def list_available_cars(
    query: AvailabilityQueryDTO = Depends(),
    checker: AvailabilityChecker = Depends(get_availability_checker),
) -> AvailableCarsResponseDTO:
    cars = checker.find_available(as_utc(query.start_at), as_utc(query.end_at))
    return CarMapper.to_available_cars_response(cars)


@router.get(
    "/cars/{car_id}/availability",
    response_model=CarAvailabilityResponseDTO,
    summary="Check one car for a window",
    responses={
        404: {"model": ErrorResponse, "description": "Car not found"},
        422: {"model": ErrorResponse, "description": "end_at not after start_at"},
    },
)
def check_car_availability(
    car_id: int,
    query: AvailabilityQueryDTO = Depends(),
    checker: AvailabilityChecker = Depends(get_availability_checker),
) -> CarAvailabilityResponseDTO:
    start_at, end_at = as_utc(query.start_at), as_utc(query.end_at)
    available = checker.is_available(car_id, start_at, end_at)
    return CarMapper.to_availability_response(car_id, start_at, end_at, available)


@router.get(
    "/cars/{car_id}/rentals",
    response_model=RentalListResponseDTO,
    summary="Rentals of a car",
    description="Rental history of a car, most recent first.",
    responses={404: {"model": ErrorResponse, "description": "Car not found"}},
)
def list_car_rentals(
    car_id: int,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalListResponseDTO:
    return RentalMapper.to_list_response(lifecycle.list_for_car(car_id), clock())
