"""Rental lifecycle use case.

Orchestrates create, price preview, extend, update, return and cancel on
top of the repositories, the pricing strategies and the availability
checker. Every state-changing operation for a car runs under that car's
lock and loads the car FOR UPDATE, so the availability check, the rental
write and the car status change happen as one unit.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterator

from car_rental_admin.domain.car import Car, CarStatus, Category
from car_rental_admin.domain.clock import Clock, utc_now
from car_rental_admin.domain.errors import (
    CarUnavailable,
    InvalidState,
    InvalidWindow,
    NotFoundError,
)
from car_rental_admin.domain.pricing import (
    HourlyPricingStrategy,
    PricingResult,
    PricingStrategyFactory,
    to_cents,
)
from car_rental_admin.domain.rental import RateType, Rental, RentalStatus, TimeWindow
from car_rental_admin.ports.car_repository import CarRepository
from car_rental_admin.ports.customer_repository import CustomerRepository
from car_rental_admin.ports.rental_repository import RentalRepository
from car_rental_admin.use_cases.availability_checker import AvailabilityChecker
from car_rental_admin.use_cases.car_locks import CarLocks

logger = logging.getLogger(__name__)

DEFAULT_LATE_FEE_PERCENT = Decimal("100")
ZERO_FEE = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class CreateRentalRequest:
    """Request to book a car for a customer."""

    customer_id: int
    car_id: int
    rate_type: RateType
    start_at: datetime
    planned_end_at: datetime
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class PricePreviewRequest:
    """Request to quote a rental without booking it."""

    car_id: int
    rate_type: RateType
    start_at: datetime
    planned_end_at: datetime


@dataclass(frozen=True, slots=True)
class UpdateRentalRequest:
    """Request to change the planned end and rate type of an active rental."""

    planned_end_at: datetime
    rate_type: RateType
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class ReturnRentalRequest:
    """
    Request to close a rental with the car back in the fleet.

    actual_return_at defaults to the current time. new_mileage_km updates the
    car odometer only when it does not go backwards.
    """

    actual_return_at: datetime | None = None
    notes: str | None = None
    new_mileage_km: int | None = None


class RentalLifecycle:
    """
    State machine for rentals: ACTIVE -> RETURNED | CANCELLED.

    Responsibilities:
    - Validate windows and rate types before touching state
    - Reject bookings that collide with another ACTIVE rental of the car
    - Price and re-price rentals through the pricing strategies
    - Charge late fees on overdue returns
    - Keep the car status consistent with its active rentals
    """

    def __init__(
        self,
        car_repository: CarRepository,
        rental_repository: RentalRepository,
        customer_repository: CustomerRepository,
        pricing_factory: PricingStrategyFactory | None = None,
        car_locks: CarLocks | None = None,
        late_fee_percent: Decimal = DEFAULT_LATE_FEE_PERCENT,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            car_repository: Repository for car and category data access
            rental_repository: Repository for rental data access
            customer_repository: Repository for customer lookups
            pricing_factory: Strategy lookup by rate type (default strategies if omitted)
            car_locks: Per-car locks shared by every lifecycle instance of the process
            late_fee_percent: Share of the hourly rate charged per overdue hour
            clock: Source of the current time
        """
        self._cars = car_repository
        self._rentals = rental_repository
        self._customers = customer_repository
        self._pricing = pricing_factory or PricingStrategyFactory()
        self._availability = AvailabilityChecker(car_repository, rental_repository)
        self._locks = car_locks or CarLocks()
        self._late_fee_percent = late_fee_percent
        self._late_fee_units = HourlyPricingStrategy()
        self._clock = clock

    # Commands

    def create(self, request: CreateRentalRequest) -> Rental:
        """
        Book a car and mark it RENTED.

        Raises:
            InvalidWindow: If start_at is not before planned_end_at
            InvalidRateType: If no strategy prices the rate type
            NotFoundError: If the customer, car or its category doesn't exist
            CarUnavailable: If the car is under maintenance or already booked
                            for an overlapping window
        """
        window = TimeWindow(request.start_at, request.planned_end_at)
        window.validate()
        strategy = self._pricing.get(request.rate_type)

        if self._customers.get_by_id(request.customer_id) is None:
            raise NotFoundError(resource="Customer", identifier=request.customer_id)

        with self._locks.hold(request.car_id):
            car = self._load_car(request.car_id, for_update=True)

            if not self._availability.is_bookable(car, window):
                logger.info(
                    "Rental rejected, car unavailable",
                    extra={"car_id": car.id, "car_status": car.status.value},
                )
                raise CarUnavailable(
                    "Car is not available for the requested window",
                    car_id=car.id,
                    start_at=window.start.isoformat(),
                    planned_end_at=window.end.isoformat(),
                )

            pricing = strategy.calculate(
                car, self._load_category(car), window.start, window.end
            )
            rental = self._rentals.save(
                Rental(
                    customer_id=request.customer_id,
                    car_id=car.id,
                    start_at=window.start,
                    planned_end_at=window.end,
                    rate_type=request.rate_type,
                    base_price=pricing.price,
                    late_fee=ZERO_FEE,
                    total_price=pricing.price,
                    notes=request.notes,
                )
            )

            if car.status != CarStatus.RENTED:
                self._cars.save(replace(car, status=CarStatus.RENTED))

        logger.info(
            "Rental created",
            extra={
                "rental_id": rental.id,
                "car_id": rental.car_id,
                "customer_id": rental.customer_id,
                "rate_type": rental.rate_type.value,
                "base_price": str(rental.base_price),
            },
        )
        return rental

    def preview_price(self, request: PricePreviewRequest) -> PricingResult:
        """
        Quote a rental without any side effect.

        Raises:
            InvalidWindow: If start_at is not before planned_end_at
            InvalidRateType: If no strategy prices the rate type
            NotFoundError: If the car or its category doesn't exist
        """
        window = TimeWindow(request.start_at, request.planned_end_at)
        window.validate()
        strategy = self._pricing.get(request.rate_type)

        car = self._load_car(request.car_id)
        return strategy.calculate(car, self._load_category(car), window.start, window.end)

    def extend(self, rental_id: int, new_planned_end_at: datetime) -> Rental:
        """
        Move the planned end of an active rental forward and re-price it.

        Raises:
            NotFoundError: If the rental doesn't exist
            InvalidState: If the rental is not ACTIVE
            InvalidWindow: If the new end is not after the current planned end
            CarUnavailable: If the extension collides with another active rental
        """
        with self._locked_rental(rental_id) as (rental, car):
            self._require_active(rental, "extend")

            if not new_planned_end_at > rental.planned_end_at:
                raise InvalidWindow(
                    "new planned end must be after the current planned end",
                    planned_end_at=rental.planned_end_at.isoformat(),
                    new_planned_end_at=new_planned_end_at.isoformat(),
                )

            extension = TimeWindow(rental.planned_end_at, new_planned_end_at)
            self._ensure_no_conflict(car, extension, rental)

            pricing = self._pricing.get(rental.rate_type).calculate(
                car, self._load_category(car), rental.start_at, new_planned_end_at
            )
            extended = self._rentals.save(
                replace(
                    rental,
                    planned_end_at=new_planned_end_at,
                    base_price=pricing.price,
                    total_price=to_cents(pricing.price + rental.late_fee),
                )
            )

        logger.info(
            "Rental extended",
            extra={
                "rental_id": extended.id,
                "planned_end_at": extended.planned_end_at.isoformat(),
                "base_price": str(extended.base_price),
            },
        )
        return extended

    def update(self, rental_id: int, request: UpdateRentalRequest) -> Rental:
        """
        Replace the planned end, rate type and notes of an active rental.

        Raises:
            NotFoundError: If the rental doesn't exist
            InvalidState: If the rental is not ACTIVE
            InvalidWindow: If the planned end is not after the rental start
            InvalidRateType: If no strategy prices the rate type
            CarUnavailable: If a longer window collides with another active rental
        """
        with self._locked_rental(rental_id) as (rental, car):
            self._require_active(rental, "update")

            window = TimeWindow(rental.start_at, request.planned_end_at)
            window.validate()
            strategy = self._pricing.get(request.rate_type)

            if request.planned_end_at > rental.planned_end_at:
                self._ensure_no_conflict(
                    car, TimeWindow(rental.planned_end_at, request.planned_end_at), rental
                )

            pricing = strategy.calculate(
                car, self._load_category(car), window.start, window.end
            )
            updated = self._rentals.save(
                replace(
                    rental,
                    planned_end_at=request.planned_end_at,
                    rate_type=request.rate_type,
                    base_price=pricing.price,
                    total_price=to_cents(pricing.price + rental.late_fee),
                    notes=request.notes,
                )
            )

        logger.info(
            "Rental updated",
            extra={
                "rental_id": updated.id,
                "rate_type": updated.rate_type.value,
                "base_price": str(updated.base_price),
            },
        )
        return updated

    def return_rental(
        self, rental_id: int, request: ReturnRentalRequest | None = None
    ) -> Rental:
        """
        Close an active rental, charging a late fee when returned after the planned end.

        Late fee: hourly rate * overdue hours (rounded up, at least one)
        * late fee percent / 100. Returning on or before the planned end
        costs nothing extra.

        Raises:
            NotFoundError: If the rental doesn't exist
            InvalidState: If the rental is not ACTIVE
            InvalidWindow: If the return is recorded before the rental started
        """
        request = request or ReturnRentalRequest()
        actual_return_at = request.actual_return_at or self._clock()

        with self._locked_rental(rental_id) as (rental, car):
            self._require_active(rental, "return")

            if actual_return_at < rental.start_at:
                raise InvalidWindow(
                    "return cannot be before the rental start",
                    start_at=rental.start_at.isoformat(),
                    actual_return_at=actual_return_at.isoformat(),
                )

            late_fee = self._late_fee(car, rental.planned_end_at, actual_return_at)

            returned = self._rentals.save(
                replace(
                    rental,
                    status=RentalStatus.RETURNED,
                    actual_return_at=actual_return_at,
                    late_fee=late_fee,
                    total_price=to_cents(rental.base_price + late_fee),
                    notes=request.notes if request.notes is not None else rental.notes,
                )
            )
            self._release_car(car, returned, new_mileage_km=request.new_mileage_km)

        logger.info(
            "Rental returned",
            extra={
                "rental_id": returned.id,
                "car_id": returned.car_id,
                "late_fee": str(returned.late_fee),
                "total_price": str(returned.total_price),
            },
        )
        return returned

    def cancel(self, rental_id: int) -> Rental:
        """
        Cancel an active rental. Prices and fees are left untouched.

        Raises:
            NotFoundError: If the rental doesn't exist
            InvalidState: If the rental is not ACTIVE
        """
        with self._locked_rental(rental_id) as (rental, car):
            self._require_active(rental, "cancel")

            cancelled = self._rentals.save(replace(rental, status=RentalStatus.CANCELLED))
            self._release_car(car, cancelled)

        logger.info(
            "Rental cancelled",
            extra={"rental_id": cancelled.id, "car_id": cancelled.car_id},
        )
        return cancelled

    # Queries

    def get(self, rental_id: int) -> Rental:
        """
        Raises:
            NotFoundError: If the rental doesn't exist
        """
        return self._load_rental(rental_id)

    def list_all(self) -> list[Rental]:
        return self._rentals.list_all()

    def list_by_status(self, status: RentalStatus) -> list[Rental]:
        """Rentals in a stored status; OVERDUE is answered from the overdue projection."""
        if status == RentalStatus.OVERDUE:
            return self.list_overdue()
        return self._rentals.find_by_status(status)

    def list_overdue(self, now: datetime | None = None) -> list[Rental]:
        """ACTIVE rentals whose planned end is before now, soonest-overdue first."""
        return self._rentals.find_overdue(now or self._clock())

    def list_for_car(self, car_id: int) -> list[Rental]:
        """
        Raises:
            NotFoundError: If the car doesn't exist
        """
        self._load_car(car_id)
        return self._rentals.find_by_car(car_id)

    def list_for_customer(self, customer_id: int) -> list[Rental]:
        """
        Raises:
            NotFoundError: If the customer doesn't exist
        """
        if self._customers.get_by_id(customer_id) is None:
            raise NotFoundError(resource="Customer", identifier=customer_id)
        return self._rentals.find_by_customer(customer_id)

    # Helpers

    @contextmanager
    def _locked_rental(self, rental_id: int) -> Iterator[tuple[Rental, Car]]:
        # car_id never changes, so the first read only picks the lock. The
        # rental is re-read after the car row lock, which waits for any
        # previous holder's transaction to commit.
        car_id = self._load_rental(rental_id).car_id
        with self._locks.hold(car_id):
            car = self._load_car(car_id, for_update=True)
            yield self._load_rental(rental_id), car

    def _load_rental(self, rental_id: int) -> Rental:
        rental = self._rentals.get_by_id(rental_id)
        if rental is None:
            raise NotFoundError(resource="Rental", identifier=rental_id)
        return rental

    def _load_car(self, car_id: int, *, for_update: bool = False) -> Car:
        car = self._cars.get_by_id(car_id, for_update=for_update)
        if car is None:
            raise NotFoundError(resource="Car", identifier=car_id)
        return car

    def _load_category(self, car: Car) -> Category:
        category = self._cars.get_category(car.category_id)
        if category is None:
            raise NotFoundError(resource="Category", identifier=car.category_id)
        return category

    @staticmethod
    def _require_active(rental: Rental, action: str) -> None:
        if not rental.is_active:
            raise InvalidState(
                f"Cannot {action} a rental in status {rental.status.value}",
                rental_id=rental.id,
                status=rental.status.value,
            )

    def _ensure_no_conflict(self, car: Car, window: TimeWindow, rental: Rental) -> None:
        if self._availability.has_conflict(car.id, window, exclude_rental_id=rental.id):
            raise CarUnavailable(
                "Car is booked by another rental in the requested window",
                car_id=car.id,
                rental_id=rental.id,
            )

    def _late_fee(self, car: Car, planned_end_at: datetime, actual_return_at: datetime) -> Decimal:
        if actual_return_at <= planned_end_at:
            return ZERO_FEE

        overdue_hours = self._late_fee_units.billed_units(planned_end_at, actual_return_at)
        return to_cents(
            car.hourly_rate * overdue_hours * self._late_fee_percent / Decimal("100")
        )

    def _release_car(
        self, car: Car, closed: Rental, *, new_mileage_km: int | None = None
    ) -> None:
        changes: dict[str, object] = {}

        if new_mileage_km is not None and new_mileage_km >= car.mileage_km:
            changes["mileage_km"] = new_mileage_km

        if car.status == CarStatus.RENTED and not any(
            other.is_active and other.id != closed.id
            for other in self._rentals.find_by_car(car.id)
        ):
            changes["status"] = CarStatus.AVAILABLE

        if changes:
            self._cars.save(replace(car, **changes))
