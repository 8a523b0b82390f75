"""
Availability Index

Derived, read-only view of which nights each unit is occupied.

Every reservation that is not cancelled projects one BookedInterval
``[check_in, check_out)`` onto its unit. The checkout day itself is free,
so a stay ending on the 13th and another starting on the 13th do not
conflict.

The index is rebuilt from the reservation set on demand; it is never
mutated in place and never written back to the database. The reservation
store remains the only source of truth.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Hashable, Iterable, List, Tuple

from shared.domain.value_objects import DateRange, InvalidDateRange

CANCELLED = 'cancelled'


@dataclass(frozen=True)
class BookedInterval:
    """
    Occupied-interval projection of an active reservation

    ``start`` is inclusive, ``end`` is exclusive.
    """
    unit_id: Hashable
    start: date
    end: date
    reservation_id: Hashable | None = None

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidDateRange(
                f"Booked interval end ({self.end}) must be after start ({self.start})"
            )

    def intersects(self, start: date, end: date) -> bool:
        return start < self.end and self.start < end

    def covers(self, day: date) -> bool:
        return self.start <= day < self.end

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start, self.end)


class AvailabilityIndex:
    """
    Per-unit set of booked intervals

    Usage:
        index = AvailabilityIndex.from_reservations(Reservation.objects.all())
        if index.is_range_free(unit.id, check_in, check_out):
            ...
    """

    def __init__(self, intervals: Iterable[BookedInterval] = ()):
        by_unit: Dict[Hashable, List[BookedInterval]] = {}
        for interval in intervals:
            by_unit.setdefault(interval.unit_id, []).append(interval)
        self._by_unit: Dict[Hashable, Tuple[BookedInterval, ...]] = {
            unit_id: tuple(sorted(items, key=lambda i: (i.start, i.end)))
            for unit_id, items in by_unit.items()
        }

    @classmethod
    def from_reservations(cls, reservations: Iterable) -> 'AvailabilityIndex':
        """
        Build the index from reservation-like objects

        Objects need ``unit_id``, ``check_in``, ``check_out`` and ``status``;
        cancelled reservations are skipped entirely.
        """
        return cls(
            BookedInterval(
                unit_id=reservation.unit_id,
                start=reservation.check_in,
                end=reservation.check_out,
                reservation_id=getattr(reservation, 'pk', None),
            )
            for reservation in reservations
            if reservation.status != CANCELLED
        )

    def intervals_for(self, unit_id: Hashable) -> Tuple[BookedInterval, ...]:
        """All active intervals for a unit, ordered by start date"""
        return self._by_unit.get(unit_id, ())

    def overlapping(self, unit_id: Hashable, start: date, end: date) -> List[BookedInterval]:
        """Intervals intersecting ``[start, end)``"""
        if start >= end:
            raise InvalidDateRange(f"End date ({end}) must be after start date ({start})")
        return [i for i in self.intervals_for(unit_id) if i.intersects(start, end)]

    def is_range_free(self, unit_id: Hashable, start: date, end: date) -> bool:
        """
        True iff no active interval for the unit intersects ``[start, end)``

        Adjacent intervals do not intersect.
        """
        return not self.overlapping(unit_id, start, end)

    def is_date_booked(self, unit_id: Hashable, day: date) -> bool:
        """True if the night starting on ``day`` is occupied"""
        return any(i.covers(day) for i in self.intervals_for(unit_id))

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_unit.values())

    def __repr__(self):
        return f"AvailabilityIndex(units={len(self._by_unit)}, intervals={len(self)})"
