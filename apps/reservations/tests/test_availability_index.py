from datetime import date
from types import SimpleNamespace

import pytest

from apps.reservations.domain.availability import AvailabilityIndex, BookedInterval
from shared.domain.value_objects import InvalidDateRange


def reservation(unit_id, check_in, check_out, status="confirmed", pk=None):
    return SimpleNamespace(unit_id=unit_id, check_in=check_in, check_out=check_out, status=status, pk=pk)


@pytest.fixture
def index():
    return AvailabilityIndex.from_reservations(
        [
            reservation(1, date(2024, 6, 10), date(2024, 6, 13), pk=1),
            reservation(1, date(2024, 6, 20), date(2024, 6, 22), status="cancelled", pk=2),
            reservation(2, date(2024, 6, 1), date(2024, 6, 30), pk=3),
        ]
    )


def test_checkout_day_is_free_for_next_check_in(index):
    assert index.is_range_free(1, date(2024, 6, 13), date(2024, 6, 15))
    assert index.is_range_free(1, date(2024, 6, 8), date(2024, 6, 10))


def test_overlapping_range_is_not_free(index):
    assert not index.is_range_free(1, date(2024, 6, 12), date(2024, 6, 14))
    assert not index.is_range_free(1, date(2024, 6, 5), date(2024, 6, 20))


def test_cancelled_reservations_do_not_block(index):
    assert index.is_range_free(1, date(2024, 6, 20), date(2024, 6, 22))
    assert len(index.intervals_for(1)) == 1


def test_units_are_independent(index):
    assert index.is_range_free(3, date(2024, 6, 10), date(2024, 6, 13))
    assert not index.is_date_booked(1, date(2024, 6, 29))
    assert index.is_date_booked(2, date(2024, 6, 29))


def test_is_date_booked_excludes_checkout_day(index):
    assert index.is_date_booked(1, date(2024, 6, 10))
    assert index.is_date_booked(1, date(2024, 6, 12))
    assert not index.is_date_booked(1, date(2024, 6, 13))


def test_overlapping_returns_intervals(index):
    found = index.overlapping(1, date(2024, 6, 1), date(2024, 7, 1))

    assert [i.reservation_id for i in found] == [1]


def test_empty_query_range_raises(index):
    with pytest.raises(InvalidDateRange):
        index.is_range_free(1, date(2024, 6, 13), date(2024, 6, 13))


def test_booked_interval_requires_positive_length():
    with pytest.raises(InvalidDateRange):
        BookedInterval(unit_id=1, start=date(2024, 6, 13), end=date(2024, 6, 10))
