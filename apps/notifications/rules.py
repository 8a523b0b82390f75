"""Notification rules: when each scheduled message becomes due."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Tuple

from django.conf import settings  # type: ignore

CONFIRMATION = "confirmation"
PRE_ARRIVAL = "pre-arrival"
REVIEW_REQUEST = "review-request"
PAYMENT_RECEIPT = "payment-receipt"

REFERENCE_FIELDS = ("check_in", "check_out")

DEFAULT_RULES: Tuple[Tuple[str, str, int], ...] = (
    (PRE_ARRIVAL, "check_in", -2),
    (REVIEW_REQUEST, "check_out", 2),
)


@dataclass(frozen=True)
class NotificationRule:
    """
    ``offset_days`` is signed relative to the reference date:
    -2 on check_in is two days before arrival, +2 on check_out is two days
    after departure.
    """

    notification_type: str
    reference_field: str
    offset_days: int

    def __post_init__(self):
        if self.reference_field not in REFERENCE_FIELDS:
            raise ValueError(f"Unknown reference field: {self.reference_field!r}")

    def day_delta(self, reservation, today: date) -> int:
        reference: date = getattr(reservation, self.reference_field)
        return (today - reference).days

    def is_due(self, reservation, today: date) -> bool:
        return self.day_delta(reservation, today) == self.offset_days


def build_rules(raw: Iterable) -> List[NotificationRule]:
    return [NotificationRule(str(t), str(field), int(offset)) for t, field, offset in raw]


def configured_rules() -> List[NotificationRule]:
    return build_rules(getattr(settings, "NOTIFICATION_RULES", DEFAULT_RULES))
