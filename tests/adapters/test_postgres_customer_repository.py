from __future__ import annotations

from unittest.mock import Mock

import pytest
from sqlalchemy.orm import Session

from car_rental_admin.adapters.postgres_customer_repository import PostgresCustomerRepository
from car_rental_admin.domain.customer import Customer
from car_rental_admin.infra.db.models.customer import CustomerRow


@pytest.fixture()
def mock_session() -> Mock:
    return Mock(spec=Session)


def test_get_by_id_converts_row(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = CustomerRow(
        id=3, first_name="Carol", last_name="Rossi", email="carol@example.com", phone="+48 600"
    )

    assert PostgresCustomerRepository(mock_session).get_by_id(3) == Customer(
        id=3, first_name="Carol", last_name="Rossi", email="carol@example.com", phone="+48 600"
    )


def test_get_by_id_missing(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = None

    assert PostgresCustomerRepository(mock_session).get_by_id(3) is None


def test_list_all(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [
        CustomerRow(id=1, first_name="A", last_name="B", email="a@example.com"),
        CustomerRow(id=2, first_name="C", last_name="D", email="c@example.com"),
    ]

    customers = PostgresCustomerRepository(mock_session).list_all()

    assert [c.id for c in customers] == [1, 2]
    assert customers[0].phone is None
