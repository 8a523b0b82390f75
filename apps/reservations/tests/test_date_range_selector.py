from datetime import date
from types import SimpleNamespace

import pytest

from apps.reservations.domain.availability import AvailabilityIndex
from apps.reservations.domain.selector import (
    CheckInOnly,
    DateRangeSelector,
    Empty,
    RangeComplete,
    state_from_dict,
)

TODAY = date(2024, 6, 1)


@pytest.fixture
def selector():
    index = AvailabilityIndex.from_reservations(
        [
            SimpleNamespace(
                unit_id=1,
                check_in=date(2024, 6, 12),
                check_out=date(2024, 6, 15),
                status="confirmed",
                pk=1,
            )
        ]
    )
    return DateRangeSelector(index, unit_id=1, today=TODAY)


def test_first_click_sets_check_in(selector):
    assert selector.select(Empty(), date(2024, 6, 5)) == CheckInOnly(date(2024, 6, 5))


def test_second_click_completes_range(selector):
    state = selector.select(CheckInOnly(date(2024, 6, 5)), date(2024, 6, 8))

    assert state == RangeComplete(date(2024, 6, 5), date(2024, 6, 8))
    assert state.nights == 3


def test_earlier_click_restarts_check_in(selector):
    assert selector.select(CheckInOnly(date(2024, 6, 8)), date(2024, 6, 5)) == CheckInOnly(date(2024, 6, 5))
    assert selector.select(CheckInOnly(date(2024, 6, 8)), date(2024, 6, 8)) == CheckInOnly(date(2024, 6, 8))


def test_past_and_booked_days_leave_state_unchanged(selector):
    state = CheckInOnly(date(2024, 6, 5))

    assert selector.select(state, date(2024, 5, 31)) is state
    assert selector.select(state, date(2024, 6, 13)) is state
    assert selector.select(Empty(), date(2024, 6, 12)) == Empty()


def test_blocked_click_keeps_completed_range(selector):
    complete = RangeComplete(date(2024, 6, 5), date(2024, 6, 8))

    assert selector.select(complete, date(2024, 6, 14)) is complete


def test_range_spanning_a_booking_restarts_at_clicked_day(selector):
    state = selector.select(CheckInOnly(date(2024, 6, 10)), date(2024, 6, 16))

    assert state == CheckInOnly(date(2024, 6, 16))


def test_new_click_after_complete_starts_over(selector):
    complete = RangeComplete(date(2024, 6, 5), date(2024, 6, 8))

    assert selector.select(complete, date(2024, 6, 20)) == CheckInOnly(date(2024, 6, 20))


def test_checkout_day_of_booking_can_start_a_stay(selector):
    state = selector.select(Empty(), date(2024, 6, 15))
    state = selector.select(state, date(2024, 6, 18))

    assert state == RangeComplete(date(2024, 6, 15), date(2024, 6, 18))


def test_completed_range_never_covers_blocked_night(selector):
    state = Empty()
    for day in (date(2024, 6, 2), date(2024, 6, 11), date(2024, 6, 14), date(2024, 6, 20), date(2024, 6, 25)):
        state = selector.select(state, day)
        if isinstance(state, RangeComplete):
            assert not any(selector.is_blocked(night) for night in state.dates.nights())


def test_state_round_trips_through_dict():
    state = RangeComplete(date(2024, 6, 5), date(2024, 6, 8))

    assert state_from_dict(state.to_dict()) == state
    assert state_from_dict(None) == Empty()
    with pytest.raises(ValueError):
        state_from_dict({"kind": "bogus"})


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "check_in_only", "check_in": 5},
        {"kind": "range_complete", "check_in": "2024-06-05", "check_out": ["2024-06-08"]},
        {"kind": "check_in_only", "check_in": "not-a-date"},
    ],
)
def test_state_with_malformed_dates_raises_value_error(payload):
    with pytest.raises(ValueError):
        state_from_dict(payload)
