"""
Pricing Engine

Prices a candidate stay from the unit's nightly base rate and an ordered
list of rules:

    subtotal = base_rate * nights
    for rule in rules (declared order):
        if rule applies: one named, signed line item
    total = subtotal + sum(line items)

Each rule may read the running subtotal, which already includes the line
items of the rules before it. Amounts are rounded to cents, half up, as
each line item is produced. The engine is pure: the same inputs always
give the same breakdown.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Sequence

from shared.domain.value_objects import DateRange, Money


@dataclass(frozen=True)
class Adjustment:
    name: str
    amount: Money

    def to_dict(self) -> dict:
        return {'name': self.name, 'amount': str(self.amount.amount)}


@dataclass(frozen=True)
class PriceBreakdown:
    nights: int
    base_rate: Money
    subtotal: Money
    total: Money
    adjustments: List[Adjustment] = field(default_factory=list)

    @property
    def currency(self) -> str:
        return self.subtotal.currency

    @property
    def average_nightly_rate(self) -> Money:
        return Money(self.total.amount / self.nights, self.currency).quantize()

    def to_dict(self) -> dict:
        return {
            'nights': self.nights,
            'currency': self.currency,
            'base_rate': str(self.base_rate.amount),
            'subtotal': str(self.subtotal.amount),
            'adjustments': [a.to_dict() for a in self.adjustments],
            'total': str(self.total.amount),
            'average_nightly_rate': str(self.average_nightly_rate.amount),
        }


class PricingEngine:
    """
    Evaluate pricing rules for a unit and a stay

    The unit only needs ``base_rate``, ``currency`` and (for scoped rules)
    ``category``.

    Usage:
        engine = PricingEngine([LongStayRule(name='Weekly', ...)])
        breakdown = engine.price(unit, date(2024, 6, 3), date(2024, 6, 10))
    """

    def __init__(self, rules: Sequence = ()):
        self.rules = tuple(rules)

    def price(self, unit, check_in: date, check_out: date) -> PriceBreakdown:
        nights = len(DateRange(check_in, check_out))
        currency = getattr(unit, 'currency', None) or 'USD'

        base_rate = Money(Decimal(unit.base_rate), currency).quantize()
        subtotal = (base_rate * nights).quantize()

        running = subtotal
        adjustments: List[Adjustment] = []
        for rule in self.rules:
            if not rule.applies_to(unit, check_in, check_out, nights):
                continue
            amount = Money(
                Decimal(rule.amount(unit, check_in, check_out, nights, running.amount)),
                currency,
            ).quantize()
            adjustments.append(Adjustment(rule.name, amount))
            running = running + amount

        return PriceBreakdown(
            nights=nights,
            base_rate=base_rate,
            subtotal=subtotal,
            adjustments=adjustments,
            total=running,
        )
