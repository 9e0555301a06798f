from __future__ import annotations

from abc import ABC, abstractmethod

from car_rental_admin.domain.customer import Customer


class CustomerNotifier(ABC):
    """
    Port for outbound customer notifications.

    Delivery (e-mail provider, templates, retries) belongs to the adapter.
    """

    @abstractmethod
    def send_inactive_customer_reminder(self, customer: Customer, inactive_days: int) -> None: ...
