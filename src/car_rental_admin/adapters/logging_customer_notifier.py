from __future__ import annotations

import logging

from car_rental_admin.domain.customer import Customer
from car_rental_admin.ports.customer_notifier import CustomerNotifier

logger = logging.getLogger(__name__)


class LoggingCustomerNotifier(CustomerNotifier):
    """
    Notifier that records reminders in the application log.

    Stands in for an e-mail provider integration; keeps the reminder
    flow observable without outbound delivery.
    """

    def send_inactive_customer_reminder(self, customer: Customer, inactive_days: int) -> None:
        logger.info(
            "Inactive customer reminder",
            extra={
                "customer_id": customer.id,
                "email": customer.email,
                "inactive_days": inactive_days,
            },
        )
