"""Rental pricing strategies.

Each strategy is a pure function of (car rates, category discount, window).

Rounding policy:
- Unit counts are whole numbers computed from the elapsed duration and
  clamped to a minimum of 1 (every rental bills at least one unit)
- Prices are rounded to 2 decimal places (cents) using ROUND_HALF_UP
- Discounts are applied before rounding: rate * units * (1 - percent / 100)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from car_rental_admin.domain.car import Car, Category
from car_rental_admin.domain.errors import NoStrategyForRateType
from car_rental_admin.domain.rental import RateType

CENTS = Decimal("0.01")
NO_DISCOUNT = Decimal("0")


@dataclass(frozen=True, slots=True)
class PricingResult:
    price: Decimal
    discount_percent: Decimal


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _elapsed_minutes(start_at: datetime, end_at: datetime) -> int:
    # Whole minutes, seconds are truncated
    return (end_at - start_at) // timedelta(minutes=1)


def _discounted(rate: Decimal, units: int, discount_percent: Decimal) -> Decimal:
    multiplier = Decimal("1") - discount_percent / Decimal("100")
    return to_cents(rate * units * multiplier)


class PricingStrategy(ABC):
    """Prices a rental window for one rate type."""

    rate_type: RateType

    @abstractmethod
    def billed_units(self, start_at: datetime, end_at: datetime) -> int:
        """Number of whole billing units for the window (always >= 1)."""
        ...

    @abstractmethod
    def calculate(
        self, car: Car, category: Category, start_at: datetime, end_at: datetime
    ) -> PricingResult: ...


class HourlyPricingStrategy(PricingStrategy):
    """Elapsed minutes rounded up to whole hours. Never discounted."""

    rate_type = RateType.HOURLY

    def billed_units(self, start_at: datetime, end_at: datetime) -> int:
        hours = _ceil_div(_elapsed_minutes(start_at, end_at), 60)
        return max(hours, 1)

    def calculate(
        self, car: Car, category: Category, start_at: datetime, end_at: datetime
    ) -> PricingResult:
        hours = self.billed_units(start_at, end_at)
        return PricingResult(price=to_cents(car.hourly_rate * hours), discount_percent=NO_DISCOUNT)


class DailyPricingStrategy(PricingStrategy):
    """
    Elapsed time rounded up to whole days, category daily discount applied.

    Days are counted from whole minutes, so 24h30m bills two days rather
    than rounding the partial hour away first.
    """

    rate_type = RateType.DAILY

    def billed_units(self, start_at: datetime, end_at: datetime) -> int:
        days = _ceil_div(_elapsed_minutes(start_at, end_at), 24 * 60)
        return max(days, 1)

    def calculate(
        self, car: Car, category: Category, start_at: datetime, end_at: datetime
    ) -> PricingResult:
        days = self.billed_units(start_at, end_at)
        discount_percent = category.daily_discount_percent or NO_DISCOUNT

        return PricingResult(
            price=_discounted(car.daily_rate, days, discount_percent),
            discount_percent=discount_percent,
        )


class WeeklyPricingStrategy(PricingStrategy):
    """
    Whole elapsed days (truncated) rounded up to whole weeks.

    The day count is truncated before the weekly ceiling, so 7 days and a
    few hours still bill exactly one week.
    """

    rate_type = RateType.WEEKLY

    def billed_units(self, start_at: datetime, end_at: datetime) -> int:
        days = (end_at - start_at) // timedelta(days=1)
        weeks = _ceil_div(days, 7)
        return max(weeks, 1)

    def calculate(
        self, car: Car, category: Category, start_at: datetime, end_at: datetime
    ) -> PricingResult:
        weeks = self.billed_units(start_at, end_at)
        discount_percent = category.weekly_discount_percent or NO_DISCOUNT

        return PricingResult(
            price=_discounted(car.weekly_rate, weeks, discount_percent),
            discount_percent=discount_percent,
        )


DEFAULT_STRATEGIES: tuple[PricingStrategy, ...] = (
    HourlyPricingStrategy(),
    DailyPricingStrategy(),
    WeeklyPricingStrategy(),
)


class PricingStrategyFactory:
    """
    Selects the pricing strategy for a rate type.

    Holds exactly one strategy per rate type. Registering two strategies
    for the same rate type is a configuration error raised at construction.
    """

    def __init__(self, strategies: Iterable[PricingStrategy] = DEFAULT_STRATEGIES) -> None:
        self._strategies: dict[RateType, PricingStrategy] = {}
        for strategy in strategies:
            if strategy.rate_type in self._strategies:
                raise ValueError(f"Duplicate pricing strategy for: {strategy.rate_type.value}")
            self._strategies[strategy.rate_type] = strategy

    @property
    def rate_types(self) -> frozenset[RateType]:
        return frozenset(self._strategies)

    def get(self, rate_type: RateType) -> PricingStrategy:
        """
        Return the strategy registered for rate_type.

        Raises:
            NoStrategyForRateType: If no strategy handles the rate type
        """
        strategy = self._strategies.get(rate_type)
        if strategy is None:
            raise NoStrategyForRateType(getattr(rate_type, "value", rate_type))
        return strategy
