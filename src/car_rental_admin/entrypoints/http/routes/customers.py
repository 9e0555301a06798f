from fastapi import APIRouter, Depends

from car_rental_admin.domain.clock import Clock
from car_rental_admin.entrypoints.http.dependencies import (
    get_clock,
    get_remind_inactive_customers_use_case,
    get_rental_lifecycle,
)
from car_rental_admin.entrypoints.http.dtos.customers import InactiveCustomerRemindersResponseDTO
from car_rental_admin.entrypoints.http.dtos.rentals import RentalListResponseDTO
from car_rental_admin.entrypoints.http.error_responses import ErrorResponse
from car_rental_admin.entrypoints.http.mappers.rental_mapper import RentalMapper
from car_rental_admin.use_cases.remind_inactive_customers import RemindInactiveCustomers
from car_rental_admin.use_cases.rental_lifecycle import RentalLifecycle

router = APIRouter(tags=["Customers"])


@router.get(
    "/customers/{customer_id}/rentals",
    response_model=RentalListResponseDTO,
    summary="Rentals of a customer",
    description="Rental history of a customer, most recent first.",
    responses={404: {"model": ErrorResponse, "description": "Customer not found"}},
)
def list_customer_rentals(
    customer_id: int,
    lifecycle: RentalLifecycle = Depends(get_rental_lifecycle),
    clock: Clock = Depends(get_clock),
) -> RentalListResponseDTO:
    return RentalMapper.to_list_response(lifecycle.list_for_customer(customer_id), clock())


@router.post(
    "/customers/inactive-reminders",
    response_model=InactiveCustomerRemindersResponseDTO,
    summary="Remind inactive customers",
    description="""
    Send a reminder to every customer without rentals, or whose last rental
    ended more than INACTIVE_CUSTOMER_DAYS ago.
    """,
)
def remind_inactive_customers(
    use_case: RemindInactiveCustomers = Depends(get_remind_inactive_customers_use_case),
) -> InactiveCustomerRemindersResponseDTO:
    result = use_case.execute()
    return InactiveCustomerRemindersResponseDTO(
        reminded_customer_ids=result.reminded_customer_ids,
        total=len(result.reminded_customer_ids),
    )
