from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from apps.pricing.engine import PriceBreakdown, PricingEngine
from apps.pricing.rules import (
    PERCENTAGE,
    DateWindowRule,
    LastMinuteRule,
    LongStayRule,
    NightlyRule,
    WeekdayRule,
)
from shared.domain.value_objects import InvalidDateRange, Money

MONDAY = date(2024, 6, 3)
FRI_SAT = frozenset({4, 5})


def make_unit(base_rate="450.00", category="standard"):
    return SimpleNamespace(pk=1, base_rate=Decimal(base_rate), currency="USD", category=category)


def test_no_rules_is_base_rate_times_nights():
    breakdown = PricingEngine().price(make_unit(), MONDAY, date(2024, 6, 6))

    assert breakdown.nights == 3
    assert breakdown.subtotal.amount == Decimal("1350.00")
    assert breakdown.adjustments == []
    assert breakdown.total.amount == Decimal("1350.00")


def test_single_night_costs_base_rate():
    breakdown = PricingEngine().price(make_unit(), MONDAY, date(2024, 6, 4))

    assert breakdown.total.amount == Decimal("450.00")
    assert breakdown.average_nightly_rate.amount == Decimal("450.00")


@pytest.mark.parametrize("check_out", [MONDAY, date(2024, 6, 2)])
def test_empty_or_inverted_stay_is_rejected(check_out):
    with pytest.raises(InvalidDateRange):
        PricingEngine().price(make_unit(), MONDAY, check_out)


def test_weekday_rule_adjusts_matching_nights_only():
    weekend = WeekdayRule(name="Weekend", adjustment_type="percentage", value=Decimal("20"), days_of_week=FRI_SAT)

    # Thu, Fri, Sat nights
    breakdown = PricingEngine([weekend]).price(make_unit(), date(2024, 6, 6), date(2024, 6, 9))

    assert [(a.name, a.amount.amount) for a in breakdown.adjustments] == [("Weekend", Decimal("180.00"))]
    assert breakdown.total.amount == Decimal("1530.00")


def test_date_window_is_inclusive_and_fixed_per_night():
    festival = DateWindowRule(
        name="Festival",
        adjustment_type="fixed_amount",
        value=Decimal("30"),
        start_date=date(2024, 6, 4),
        end_date=date(2024, 6, 5),
    )

    breakdown = PricingEngine([festival]).price(make_unit("100"), MONDAY, date(2024, 6, 7))

    assert breakdown.adjustments[0].amount.amount == Decimal("60.00")
    assert breakdown.total.amount == Decimal("460.00")


def test_rules_see_running_subtotal_in_declared_order():
    weekend = WeekdayRule(name="Weekend", adjustment_type="percentage", value=Decimal("20"), days_of_week=FRI_SAT)
    weekly = LongStayRule(name="Weekly", adjustment_type="percentage", value=Decimal("-10"), min_nights=7)
    unit = make_unit("100")
    check_out = date(2024, 6, 10)

    weekend_first = PricingEngine([weekend, weekly]).price(unit, MONDAY, check_out)
    weekly_first = PricingEngine([weekly, weekend]).price(unit, MONDAY, check_out)

    assert weekend_first.subtotal.amount == Decimal("700.00")
    assert [a.amount.amount for a in weekend_first.adjustments] == [Decimal("40.00"), Decimal("-74.00")]
    assert weekend_first.total.amount == Decimal("666.00")
    assert weekly_first.total.amount == Decimal("670.00")


def test_long_stay_needs_minimum_nights():
    weekly = LongStayRule(name="Weekly", adjustment_type="percentage", value=Decimal("-10"), min_nights=7)

    breakdown = PricingEngine([weekly]).price(make_unit("100"), MONDAY, date(2024, 6, 9))

    assert breakdown.adjustments == []


def test_last_minute_uses_quote_date():
    deal = LastMinuteRule(
        name="Last minute",
        adjustment_type="fixed_amount",
        value=Decimal("-25"),
        max_days_before_arrival=3,
        today=date(2024, 6, 1),
    )
    engine = PricingEngine([deal])

    assert engine.price(make_unit(), MONDAY, date(2024, 6, 4)).total.amount == Decimal("425.00")
    assert engine.price(make_unit(), date(2024, 6, 10), date(2024, 6, 11)).adjustments == []


def test_category_scope_limits_rules():
    suites_only = LongStayRule(
        name="Suite stay",
        adjustment_type="fixed_amount",
        value=Decimal("-50"),
        min_nights=1,
        categories=frozenset({"suite"}),
    )
    everyone = LongStayRule(
        name="Everyone",
        adjustment_type="fixed_amount",
        value=Decimal("-5"),
        min_nights=1,
        categories=frozenset({"all"}),
    )
    engine = PricingEngine([suites_only, everyone])

    standard = engine.price(make_unit(category="standard"), MONDAY, date(2024, 6, 4))
    suite = engine.price(make_unit(category="suite"), MONDAY, date(2024, 6, 4))

    assert [a.name for a in standard.adjustments] == ["Everyone"]
    assert suite.total.amount == Decimal("395.00")


def test_pricing_is_deterministic():
    rules = [WeekdayRule(name="Weekend", adjustment_type="percentage", value=Decimal("12.5"), days_of_week=FRI_SAT)]
    engine = PricingEngine(rules)
    unit = make_unit("99.99")

    first = engine.price(unit, MONDAY, date(2024, 6, 12))
    second = engine.price(unit, MONDAY, date(2024, 6, 12))

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_adjustments_are_rounded_half_up():
    rules = [WeekdayRule(name="Odd", adjustment_type="percentage", value=Decimal("0.5"), days_of_week=frozenset({0}))]

    breakdown = PricingEngine(rules).price(make_unit("1.00"), MONDAY, date(2024, 6, 4))

    assert breakdown.adjustments[0].amount.amount == Decimal("0.01")


def test_nightly_rule_needs_a_night_matcher():
    with pytest.raises(TypeError):
        NightlyRule(name="Bare", adjustment_type=PERCENTAGE, value=Decimal("10"))


def test_breakdown_requires_a_total():
    subtotal = Money(Decimal("450.00"), "USD")

    with pytest.raises(TypeError):
        PriceBreakdown(nights=1, base_rate=subtotal, subtotal=subtotal)

    breakdown = PriceBreakdown(nights=1, base_rate=subtotal, subtotal=subtotal, total=subtotal)
    assert breakdown.to_dict()["average_nightly_rate"] == "450.00"
