from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Iterator


class CarLocks:
    """
    One mutual-exclusion lock per car id.

    State-changing rental operations for the same car run one at a time,
    so the availability check and the car status flip are atomic with
    respect to concurrent bookings in this process. Operations on
    different cars do not block each other.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[int, Lock] = {}

    @contextmanager
    def hold(self, car_id: int) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(car_id, Lock())

        with lock:
            yield
