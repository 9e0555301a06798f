from __future__ import annotations

from dataclasses import replace

from car_rental_admin.adapters.in_memory_car_repository import InMemoryCarRepository
from car_rental_admin.domain.car import Car, CarStatus, Category


def test_get_car_and_category(
    car_repository: InMemoryCarRepository, panda: Car, economy: Category
) -> None:
    assert car_repository.get_by_id(panda.id) == panda
    assert car_repository.get_by_id(panda.id, for_update=True) == panda
    assert car_repository.get_category(economy.id) == economy


def test_missing_entries_return_none(car_repository: InMemoryCarRepository) -> None:
    assert car_repository.get_by_id(99) is None
    assert car_repository.get_category(99) is None


def test_list_by_status_ordered_by_id(
    car_repository: InMemoryCarRepository, panda: Car, audi: Car, workshop_car: Car
) -> None:
    assert car_repository.list_by_status(CarStatus.AVAILABLE) == [panda, audi]
    assert car_repository.list_by_status(CarStatus.MAINTENANCE) == [workshop_car]
    assert car_repository.list_by_status(CarStatus.RENTED) == []


def test_save_replaces_snapshot(car_repository: InMemoryCarRepository, panda: Car) -> None:
    rented = replace(panda, status=CarStatus.RENTED)

    assert car_repository.save(rented) == rented
    assert car_repository.get_by_id(panda.id).status == CarStatus.RENTED
