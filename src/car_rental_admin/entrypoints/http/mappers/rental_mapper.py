from __future__ import annotations

from datetime import datetime, timezone

from car_rental_admin.domain.errors import InvalidRateType, ValidationError
from car_rental_admin.domain.pricing import PricingResult
from car_rental_admin.domain.rental import RateType, Rental, RentalStatus
from car_rental_admin.entrypoints.http.dtos.rentals import (
    CreateRentalRequestDTO,
    PricePreviewRequestDTO,
    PricePreviewResponseDTO,
    RentalListResponseDTO,
    RentalResponseDTO,
    ReturnRentalRequestDTO,
    UpdateRentalRequestDTO,
)
from car_rental_admin.use_cases.rental_lifecycle import (
    CreateRentalRequest,
    PricePreviewRequest,
    ReturnRentalRequest,
    UpdateRentalRequest,
)


def as_utc(value: datetime) -> datetime:
    """Timestamps without offset are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RentalMapper:
    """Maps between REST DTOs and domain models for rentals."""

    @staticmethod
    def to_rate_type(value: str) -> RateType:
        """
        Parse a rate type name (case-insensitive).

        Raises:
            InvalidRateType: If the name is not a known rate type
        """
        try:
            return RateType(value.strip().upper())
        except ValueError:
            raise InvalidRateType(f"Unsupported rate type: {value}", rate_type=value)

    @staticmethod
    def to_status(value: str) -> RentalStatus:
        """
        Parse a rental status filter (case-insensitive, OVERDUE accepted).

        Raises:
            ValidationError: If the name is not a known status
        """
        try:
            return RentalStatus(value.strip().upper())
        except ValueError:
            raise ValidationError(
                errors=[
                    {
                        "field": "status",
                        "message": f"Must be one of {', '.join(s.value for s in RentalStatus)}",
                        "code": "INVALID_STATUS",
                    }
                ]
            )

    @staticmethod
    def to_create_request(dto: CreateRentalRequestDTO) -> CreateRentalRequest:
        return CreateRentalRequest(
            customer_id=dto.customer_id,
            car_id=dto.car_id,
            rate_type=RentalMapper.to_rate_type(dto.rate_type),
            start_at=as_utc(dto.start_at),
            planned_end_at=as_utc(dto.planned_end_at),
            notes=dto.notes,
        )

    @staticmethod
    def to_preview_request(dto: PricePreviewRequestDTO) -> PricePreviewRequest:
        return PricePreviewRequest(
            car_id=dto.car_id,
            rate_type=RentalMapper.to_rate_type(dto.rate_type),
            start_at=as_utc(dto.start_at),
            planned_end_at=as_utc(dto.planned_end_at),
        )

    @staticmethod
    def to_update_request(dto: UpdateRentalRequestDTO) -> UpdateRentalRequest:
        return UpdateRentalRequest(
            planned_end_at=as_utc(dto.planned_end_at),
            rate_type=RentalMapper.to_rate_type(dto.rate_type),
            notes=dto.notes,
        )

    @staticmethod
    def to_return_request(dto: ReturnRentalRequestDTO) -> ReturnRentalRequest:
        return ReturnRentalRequest(
            actual_return_at=as_utc(dto.actual_return_at) if dto.actual_return_at else None,
            notes=dto.notes,
            new_mileage_km=dto.new_mileage_km,
        )

    @staticmethod
    def to_response(rental: Rental, now: datetime) -> RentalResponseDTO:
        """
        Converts a domain Rental to its response DTO.

        Handles Decimal → string conversion and the overdue projection at the boundary.
        """
        return RentalResponseDTO(
            id=rental.id,
            customer_id=rental.customer_id,
            car_id=rental.car_id,
            rate_type=rental.rate_type.value,
            status=rental.status.value,
            is_overdue=rental.is_overdue(now),
            start_at=rental.start_at,
            planned_end_at=rental.planned_end_at,
            actual_return_at=rental.actual_return_at,
            base_price=str(rental.base_price),
            late_fee=str(rental.late_fee),
            total_price=str(rental.total_price),
            notes=rental.notes,
        )

    @staticmethod
    def to_list_response(rentals: list[Rental], now: datetime) -> RentalListResponseDTO:
        return RentalListResponseDTO(
            rentals=[RentalMapper.to_response(rental, now) for rental in rentals],
            total=len(rentals),
        )

    @staticmethod
    def to_preview_response(
        request: PricePreviewRequest, result: PricingResult
    ) -> PricePreviewResponseDTO:
        return PricePreviewResponseDTO(
            car_id=request.car_id,
            rate_type=request.rate_type.value,
            price=str(result.price),
            discount_percent=str(result.discount_percent),
        )
