from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from car_rental_admin.domain.clock import Clock, utc_now
from car_rental_admin.domain.customer import Customer
from car_rental_admin.ports.customer_notifier import CustomerNotifier
from car_rental_admin.ports.customer_repository import CustomerRepository
from car_rental_admin.ports.rental_repository import RentalRepository

logger = logging.getLogger(__name__)

DEFAULT_INACTIVE_DAYS = 30


@dataclass(frozen=True, slots=True)
class RemindInactiveCustomersResponse:
    reminded_customer_ids: list[int]


class RemindInactiveCustomers:
    """
    Send a reminder to every customer who has not rented for a while.

    A customer is inactive when they have no rentals at all, or when their
    last rental ended (returned, or planned to end) before now - inactive_days.
    """

    def __init__(
        self,
        customer_repository: CustomerRepository,
        rental_repository: RentalRepository,
        notifier: CustomerNotifier,
        inactive_days: int = DEFAULT_INACTIVE_DAYS,
        clock: Clock = utc_now,
    ) -> None:
        if inactive_days <= 0:
            raise ValueError("inactive_days must be positive")

        self._customers = customer_repository
        self._rentals = rental_repository
        self._notifier = notifier
        self._inactive_days = inactive_days
        self._clock = clock

    def execute(self) -> RemindInactiveCustomersResponse:
        threshold = self._clock() - timedelta(days=self._inactive_days)
        reminded: list[int] = []

        for customer in self._customers.list_all():
            if not self._is_inactive(customer, threshold):
                continue

            self._notifier.send_inactive_customer_reminder(customer, self._inactive_days)
            reminded.append(customer.id)

        logger.info(
            "Inactive customer reminders sent",
            extra={"reminded_count": len(reminded), "inactive_days": self._inactive_days},
        )
        return RemindInactiveCustomersResponse(reminded_customer_ids=reminded)

    def _is_inactive(self, customer: Customer, threshold: datetime) -> bool:
        if self._rentals.count_by_customer(customer.id) == 0:
            return True

        last_end = self._rentals.last_rental_end_for_customer(customer.id)
        return last_end is None or last_end < threshold
