"""
Pricing Rules

A pricing rule is anything with a ``name`` plus:

- ``applies_to(unit, check_in, check_out, nights) -> bool``
- ``amount(unit, check_in, check_out, nights, running_subtotal) -> Decimal``

``amount`` returns a signed adjustment; negative values are discounts.
Rules only read their inputs, so the engine can evaluate them in any
context without side effects.

Concrete kinds:
- DateWindowRule: nights inside an inclusive date window (seasonal, custom)
- WeekdayRule: nights falling on given weekdays (weekend)
- LongStayRule: stays of at least N nights, priced on the running subtotal
- LastMinuteRule: check-in within N days of the quote date
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import FrozenSet, Iterator

PERCENTAGE = 'percentage'
FIXED_AMOUNT = 'fixed_amount'
ALL_CATEGORIES = 'all'

HUNDRED = Decimal('100')


def _adjust(basis: Decimal, adjustment_type: str, value: Decimal) -> Decimal:
    if adjustment_type == PERCENTAGE:
        return basis * value / HUNDRED
    if adjustment_type == FIXED_AMOUNT:
        return value
    raise ValueError(f"Unknown adjustment type: {adjustment_type!r}")


def _nights(check_in: date, nights: int) -> Iterator[date]:
    for offset in range(nights):
        yield check_in + timedelta(days=offset)


@dataclass(frozen=True)
class Rule(ABC):
    """Common fields of the built-in rule kinds"""
    name: str
    adjustment_type: str
    value: Decimal
    categories: FrozenSet[str] = field(default_factory=frozenset)

    def in_scope(self, unit) -> bool:
        """Empty scope, or an explicit 'all', matches every unit"""
        if not self.categories or ALL_CATEGORIES in self.categories:
            return True
        return getattr(unit, 'category', '') in self.categories

    @abstractmethod
    def applies_to(self, unit, check_in: date, check_out: date, nights: int) -> bool:
        ...

    @abstractmethod
    def amount(
        self,
        unit,
        check_in: date,
        check_out: date,
        nights: int,
        running_subtotal: Decimal,
    ) -> Decimal:
        ...


@dataclass(frozen=True)
class NightlyRule(Rule):
    """Adjusts each matching night against the unit's base rate"""

    @abstractmethod
    def matches(self, night: date) -> bool:
        ...

    def applies_to(self, unit, check_in, check_out, nights):
        return self.in_scope(unit) and any(self.matches(n) for n in _nights(check_in, nights))

    def amount(self, unit, check_in, check_out, nights, running_subtotal):
        base_rate = Decimal(unit.base_rate)
        return sum(
            (_adjust(base_rate, self.adjustment_type, self.value)
             for night in _nights(check_in, nights) if self.matches(night)),
            Decimal('0'),
        )


@dataclass(frozen=True)
class DateWindowRule(NightlyRule):
    start_date: date | None = None
    end_date: date | None = None

    def matches(self, night: date) -> bool:
        if self.start_date is None or self.end_date is None:
            return False
        return self.start_date <= night <= self.end_date


@dataclass(frozen=True)
class WeekdayRule(NightlyRule):
    # 0=Monday ... 6=Sunday
    days_of_week: FrozenSet[int] = field(default_factory=frozenset)

    def matches(self, night: date) -> bool:
        return night.weekday() in self.days_of_week


@dataclass(frozen=True)
class LongStayRule(Rule):
    min_nights: int = 1

    def applies_to(self, unit, check_in, check_out, nights):
        return self.in_scope(unit) and nights >= self.min_nights

    def amount(self, unit, check_in, check_out, nights, running_subtotal):
        return _adjust(running_subtotal, self.adjustment_type, self.value)


@dataclass(frozen=True)
class LastMinuteRule(Rule):
    """Needs the quote date, so instances are built per quote"""
    max_days_before_arrival: int = 0
    today: date | None = None

    def applies_to(self, unit, check_in, check_out, nights):
        if self.today is None or not self.in_scope(unit):
            return False
        lead_days = (check_in - self.today).days
        return 0 <= lead_days <= self.max_days_before_arrival

    def amount(self, unit, check_in, check_out, nights, running_subtotal):
        return _adjust(running_subtotal, self.adjustment_type, self.value)


def build_rule(row, today: date | None = None) -> Rule:
    """
    Turn a persisted ``PricingRule`` row into its domain rule

    ``today`` is the quote date used by last-minute rules.
    """
    common = dict(
        name=row.name,
        adjustment_type=row.adjustment_type,
        value=Decimal(row.value),
        categories=frozenset(str(c) for c in (row.unit_categories or [])),
    )
    rule_type = row.rule_type
    if rule_type in ('seasonal', 'custom'):
        return DateWindowRule(start_date=row.start_date, end_date=row.end_date, **common)
    if rule_type == 'weekend':
        return WeekdayRule(days_of_week=frozenset(int(d) for d in row.days_of_week or []), **common)
    if rule_type == 'long_stay':
        return LongStayRule(min_nights=row.min_nights or 1, **common)
    if rule_type == 'last_minute':
        return LastMinuteRule(
            max_days_before_arrival=row.max_days_before_arrival or 0,
            today=today,
            **common,
        )
    raise ValueError(f"Unknown rule type: {rule_type!r}")
