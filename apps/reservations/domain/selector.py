"""
Date Range Selector

Pure state machine behind interactive check-in/check-out picking.

States:
- Empty: nothing selected
- CheckInOnly(check_in): first click accepted
- RangeComplete(check_in, check_out): a bookable stay

Transitions (``select(state, day)``):
- Empty -> CheckInOnly(day), unless day is blocked (state unchanged)
- CheckInOnly(ci):
    day blocked                      -> unchanged
    day <= ci                        -> CheckInOnly(day)
    booked night strictly inside     -> CheckInOnly(day)
    otherwise                        -> RangeComplete(ci, day)
- RangeComplete -> CheckInOnly(day), unless day is blocked (state unchanged)

A day is blocked when it is before today or falls inside an active booked
interval of the unit. The machine never produces a RangeComplete that spans
an occupied night.
"""

from dataclasses import dataclass
from datetime import date
from typing import Hashable, Union

from apps.reservations.domain.availability import AvailabilityIndex
from shared.domain.value_objects import DateRange


@dataclass(frozen=True)
class Empty:
    kind = 'empty'

    def to_dict(self) -> dict:
        return {'kind': self.kind}


@dataclass(frozen=True)
class CheckInOnly:
    check_in: date
    kind = 'check_in_only'

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'check_in': self.check_in.isoformat()}


@dataclass(frozen=True)
class RangeComplete:
    check_in: date
    check_out: date
    kind = 'range_complete'

    @property
    def dates(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @property
    def nights(self) -> int:
        return len(self.dates)

    def to_dict(self) -> dict:
        return {
            'kind': self.kind,
            'check_in': self.check_in.isoformat(),
            'check_out': self.check_out.isoformat(),
        }


SelectionState = Union[Empty, CheckInOnly, RangeComplete]


def _parse_day(value) -> date:
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {value!r}")
    return date.fromisoformat(value)


def state_from_dict(data: dict | None) -> SelectionState:
    """Inverse of ``to_dict``; a missing payload starts over, a malformed one raises ValueError"""
    if not data:
        return Empty()
    kind = data.get('kind')
    if kind == CheckInOnly.kind:
        return CheckInOnly(_parse_day(data['check_in']))
    if kind == RangeComplete.kind:
        return RangeComplete(
            _parse_day(data['check_in']),
            _parse_day(data['check_out']),
        )
    if kind in (None, Empty.kind):
        return Empty()
    raise ValueError(f"Unknown selection state: {kind!r}")


class DateRangeSelector:
    """
    Selection rules for one unit as of one day

    The selector holds no selection itself; callers keep the state and
    feed it back with each click.
    """

    def __init__(self, index: AvailabilityIndex, unit_id: Hashable, today: date):
        self.index = index
        self.unit_id = unit_id
        self.today = today

    def is_blocked(self, day: date) -> bool:
        return day < self.today or self.index.is_date_booked(self.unit_id, day)

    def select(self, state: SelectionState, day: date) -> SelectionState:
        if self.is_blocked(day):
            return state

        if isinstance(state, CheckInOnly):
            check_in = state.check_in
            if day <= check_in:
                return CheckInOnly(day)
            if self.is_blocked(check_in) or not self.index.is_range_free(self.unit_id, check_in, day):
                # Accepting would span an occupied night
                return CheckInOnly(day)
            return RangeComplete(check_in, day)

        # Empty, or a finished range being replaced
        return CheckInOnly(day)
