from datetime import date
from decimal import Decimal

import pytest

from shared.domain.value_objects import DateRange, InvalidDateRange, Money


def test_date_range_counts_nights():
    stay = DateRange(date(2024, 6, 10), date(2024, 6, 13))

    assert len(stay) == 3
    assert list(stay.nights()) == [date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)]


@pytest.mark.parametrize("end", [date(2024, 6, 10), date(2024, 6, 9)])
def test_date_range_rejects_empty_or_inverted(end):
    with pytest.raises(InvalidDateRange):
        DateRange(date(2024, 6, 10), end)


def test_invalid_date_range_is_a_value_error():
    assert issubclass(InvalidDateRange, ValueError)


def test_adjacent_ranges_do_not_overlap():
    first = DateRange(date(2024, 6, 10), date(2024, 6, 13))

    assert not first.overlaps_with(DateRange(date(2024, 6, 13), date(2024, 6, 15)))
    assert first.overlaps_with(DateRange(date(2024, 6, 12), date(2024, 6, 15)))
    assert not first.contains(date(2024, 6, 13))


def test_money_arithmetic_and_rounding():
    total = Money(Decimal("450"), "usd") * 3 + Money(Decimal("-10.50"), "USD")

    assert total.currency == "USD"
    assert total.amount == Decimal("1339.50")
    assert Money(Decimal("0.125")).quantize().amount == Decimal("0.13")
    assert str(Money(Decimal("1350"))) == "USD 1,350.00"


def test_money_refuses_mixed_currencies():
    with pytest.raises(ValueError):
        Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")
