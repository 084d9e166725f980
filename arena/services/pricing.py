"""Duration-based pricing for bookable slots."""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Callable

from arena.domain.models import ResourceDescriptor, TimeInterval, parse_time_of_day, overlaps

# Minor-unit precision per ISO 4217 code.
CURRENCY_DECIMAL_DIGITS: dict[str, int] = {
    "INR": 0,
    "JPY": 0,
    "USD": 2,
    "GBP": 2,
    "EUR": 2,
    "CAD": 2,
    "AUD": 2,
    "AED": 2,
    "SGD": 2,
}
DEFAULT_DECIMAL_DIGITS = 2

_ONE = Decimal(1)
_MINUTES_PER_HOUR = Decimal(60)
_TEAMS_PER_MATCH = Decimal(2)

PriceModifier = Callable[[ResourceDescriptor, dt.date, TimeInterval], Decimal]


def currency_precision(currency: str) -> int:
    return CURRENCY_DECIMAL_DIGITS.get(currency.upper(), DEFAULT_DECIMAL_DIGITS)


def currency_quantum(currency: str) -> Decimal:
    """Smallest representable amount, e.g. ``Decimal("0.01")`` for USD."""
    return _ONE.scaleb(-currency_precision(currency))


# ---------------------------------------------------------------------------
# Multiplier hooks (weekend / peak-hour pricing)
# ---------------------------------------------------------------------------


def no_modifier(resource: ResourceDescriptor, day: dt.date, slot: TimeInterval) -> Decimal:
    return _ONE


def weekend_multiplier(factor: Decimal | float | str) -> PriceModifier:
    """Apply ``factor`` on Saturdays and Sundays."""
    factor = Decimal(str(factor))

    def modifier(resource: ResourceDescriptor, day: dt.date, slot: TimeInterval) -> Decimal:
        return factor if day.weekday() >= 5 else _ONE

    return modifier


def peak_hours_multiplier(
    start: str, end: str, factor: Decimal | float | str
) -> PriceModifier:
    """Apply ``factor`` to any slot that overlaps the ``start``-``end`` window."""
    peak = TimeInterval(start=parse_time_of_day(start), end=parse_time_of_day(end))
    factor = Decimal(str(factor))

    def modifier(resource: ResourceDescriptor, day: dt.date, slot: TimeInterval) -> Decimal:
        return factor if overlaps(slot, peak) else _ONE

    return modifier


def combine_modifiers(*modifiers: PriceModifier) -> PriceModifier:
    def modifier(resource: ResourceDescriptor, day: dt.date, slot: TimeInterval) -> Decimal:
        result = _ONE
        for mod in modifiers:
            result *= mod(resource, day, slot)
        return result

    return modifier


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


class PricingCalculator:
    """Prices a slot as ``hourly_rate * hours``, scaled by an optional modifier
    and rounded half-up to the resource currency's minor unit."""

    def __init__(self, modifier: PriceModifier | None = None) -> None:
        self.modifier = modifier or no_modifier

    def total_price(
        self, resource: ResourceDescriptor, day: dt.date, slot: TimeInterval
    ) -> Decimal:
        hours = Decimal(slot.duration_minutes) / _MINUTES_PER_HOUR
        amount = resource.hourly_rate * hours * self.modifier(resource, day, slot)
        return amount.quantize(currency_quantum(resource.currency), rounding=ROUND_HALF_UP)

    def price_for(
        self,
        resource: ResourceDescriptor,
        day: dt.date,
        slot: TimeInterval,
        is_available: bool,
    ) -> Decimal | None:
        """Unbookable slots carry no price."""
        if not is_available:
            return None
        return self.total_price(resource, day, slot)

    def price_per_team(
        self, resource: ResourceDescriptor, day: dt.date, slot: TimeInterval
    ) -> Decimal:
        """Open matches split the court cost between two teams, rounded up."""
        total = self.total_price(resource, day, slot)
        return (total / _TEAMS_PER_MATCH).quantize(
            currency_quantum(resource.currency), rounding=ROUND_CEILING
        )
