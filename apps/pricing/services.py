"""Application services for price quotes."""

from __future__ import annotations

import logging
from datetime import date
from typing import List

from django.utils import timezone  # type: ignore

from .engine import PriceBreakdown, PricingEngine
from .models import PricingRule
from .rules import Rule, build_rule

logger = logging.getLogger(__name__)


def load_rules(today: date) -> List[Rule]:
    """Active rules in evaluation order."""

    rows = PricingRule.objects.filter(is_active=True).order_by("position", "id")
    return [build_rule(row, today=today) for row in rows]


def quote_for_unit(unit, check_in: date, check_out: date, today: date | None = None) -> PriceBreakdown:
    """Price a stay for ``unit`` with the currently active rules."""

    today = today or timezone.localdate()
    engine = PricingEngine(load_rules(today))
    breakdown = engine.price(unit, check_in, check_out)
    logger.debug(
        "Quoted unit %s for %s..%s: %s",
        getattr(unit, "pk", None),
        check_in,
        check_out,
        breakdown.total,
    )
    return breakdown
