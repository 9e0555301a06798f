from __future__ import annotations

from datetime import datetime

from car_rental_admin.domain.car import Car
from car_rental_admin.entrypoints.http.dtos.cars import (
    AvailableCarsResponseDTO,
    CarAvailabilityResponseDTO,
    CarResponseDTO,
)


class CarMapper:
    """Maps domain cars to REST DTOs."""

    @staticmethod
    def to_response(car: Car) -> CarResponseDTO:
        return CarResponseDTO(
            id=car.id,
            vin=car.vin,
            license_plate=car.license_plate,
            production_year=car.production_year,
            color=car.color,
            status=car.status.value,
            model_id=car.model_id,
            category_id=car.category_id,
            hourly_rate=str(car.hourly_rate),
            daily_rate=str(car.daily_rate),
            weekly_rate=str(car.weekly_rate),
            mileage_km=car.mileage_km,
        )

    @staticmethod
    def to_available_cars_response(cars: set[Car]) -> AvailableCarsResponseDTO:
        """Cars are listed by id so responses are stable."""
        ordered = sorted(cars, key=lambda car: car.id)
        return AvailableCarsResponseDTO(
            cars=[CarMapper.to_response(car) for car in ordered],
            total=len(ordered),
        )

    @staticmethod
    def to_availability_response(
        car_id: int, start_at: datetime, end_at: datetime, available: bool
    ) -> CarAvailabilityResponseDTO:
        return CarAvailabilityResponseDTO(
            car_id=car_id, start_at=start_at, end_at=end_at, available=available
        )
