from fastapi import APIRouter, Depends, Query, status

from car_rental_admin.domain.clock import Clock
from car_rental_admin.entrypoints.http.dependencies import get_clock, get_rental_lifecycle
from car_rental_admin.entrypoints.http.dtos.rentals import (
    CreateRentalRequestDTO,
    ExtendRentalRequestDTO,
    PricePreviewRequestDTO,
    PricePreviewResponseDTO,
    RentalListResponseDTO,
    RentalResponseDTO,
    ReturnRentalRequestDTO,
    UpdateRentalRequestDTO,
)
from car_rental_admin.entrypoints.http.error_responses import ErrorResponse
from car_rental_admin.entrypoints.http.mappers.rental_mapper import RentalMapper, as_utc
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle

router = APIRouter(tags=["Rentals"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Rental, car or customer not found"}}
CONFLICT = {409: {"model": ErrorResponse, "description": "Car unavailable or rental not ACTIVE"}}
INVALID = {
    400: {"model": ErrorResponse, "description": "Unsupported rate type"},
    422: {"model": ErrorResponse, "description": "Invalid time window or payload"},
}


@router.post(
    "/rentals",
    response_model=RentalResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Book a car",
    description="""
    Create an ACTIVE rental and mark the car RENTED.

    ## Availability
    - The car must not be under maintenance
    - No other ACTIVE rental of the car may overlap [start_at, planned_end_at)
    - Back-to-back bookings (one ends exactly when the next starts) are allowed

    ## Pricing
    - HOURLY: started hours, no discount
    - DAILY: started days, category daily discount
    - WEEKLY: whole days rounded up to weeks, category weekly discount
    """,
    responses={**INVALID, **NOT_FOUND, **CONFLICT},
)
def create_rental(
    payload: CreateRentalRequestDTO,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    request = RentalMapper.to_create_request(payload)
    rental = lifecycle.create(request)
    return RentalMapper.to_response(rental, clock())


@router.post(
    "/rentals/price-preview",
    response_model=PricePreviewResponseDTO,
    summary="Quote a rental",
    description="Price a rental window for a car without booking it. No side effects.",
    responses={**INVALID, **NOT_FOUND},
)
def preview_price(
    payload: PricePreviewRequestDTO,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
) -> PricePreviewResponseDTO:
    request = RentalMapper.to_preview_request(payload)
    result = lifecycle.preview_price(request)
    return RentalMapper.to_preview_response(request, result)


@router.get(
    "/rentals",
    response_model=RentalListResponseDTO,
    summary="List rentals",
    description="""
    List all rentals (by id), or the rentals in one status (most recent first).

    `status=OVERDUE` lists ACTIVE rentals past their planned end, soonest-overdue first.
    """,
    responses={422: {"model": ErrorResponse, "description": "Unknown status"}},
)
def list_rentals(
    status_filter: str | None = Query(
        default=None,
        alias="status",
        description="ACTIVE, RETURNED, CANCELLED or OVERDUE",
        examples=["ACTIVE"],
    ),
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalListResponseDTO:
    if status_filter is None:
        rentals = lifecycle.list_all()
    else:
        rentals = lifecycle.list_by_status(RentalMapper.to_status(status_filter))
    return RentalMapper.to_list_response(rentals, clock())


@router.get(
    "/rentals/overdue",
    response_model=RentalListResponseDTO,
    summary="List overdue rentals",
)
def list_overdue_rentals(
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalListResponseDTO:
    now = clock()
    return RentalMapper.to_list_response(lifecycle.list_overdue(now), now)


@router.get(
    "/rentals/{rental_id}",
    response_model=RentalResponseDTO,
    summary="Get rental by id",
    responses=NOT_FOUND,
)
def get_rental(
    rental_id: int,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    return RentalMapper.to_response(lifecycle.get(rental_id), clock())


@router.post(
    "/rentals/{rental_id}/extend",
    response_model=RentalResponseDTO,
    summary="Extend a rental",
    description="Move the planned end forward and re-price over the whole new window.",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
def extend_rental(
    rental_id: int,
    payload: ExtendRentalRequestDTO,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    rental = lifecycle.extend(rental_id, as_utc(payload.new_planned_end_at))
    return RentalMapper.to_response(rental, clock())


@router.put(
    "/rentals/{rental_id}",
    response_model=RentalResponseDTO,
    summary="Update a rental",
    description="Replace planned end, rate type and notes of an ACTIVE rental and re-price it.",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
def update_rental(
    rental_id: int,
    payload: UpdateRentalRequestDTO,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    rental = lifecycle.update(rental_id, RentalMapper.to_update_request(payload))
    return RentalMapper.to_response(rental, clock())


@router.post(
    "/rentals/{rental_id}/return",
    response_model=RentalResponseDTO,
    summary="Return a rental",
    description="""
    Close an ACTIVE rental and release the car.

    Returning after the planned end adds a late fee: the hourly rate for
    every started hour past the planned end (scaled by the configured late
    fee percentage).
    """,
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
def return_rental(
    rental_id: int,
    payload: ReturnRentalRequestDTO | None = None,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    request = RentalMapper.to_return_request(payload or ReturnRentalRequestDTO())
    rental = lifecycle.return_rental(rental_id, request)
    return RentalMapper.to_response(rental, clock())


@router.post(
    "/rentals/{rental_id}/cancel",
    response_model=RentalResponseDTO,
    summary="Cancel a rental",
    responses={**NOT_FOUND, **CONFLICT},
)
def cancel_rental(
    rental_id: int,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalResponseDTO:
    return RentalMapper.to_response(lifecycle.cancel(rental_id), clock())
