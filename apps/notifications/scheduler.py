"""
Notification Scheduler

Daily sweep that sends the time-based guest emails:

    for each non-cancelled reservation:
        for each rule:
            delta = today - reservation.<reference_field>   (whole days)
            if delta == rule.offset_days and not yet logged:
                render -> send -> append to delivery log

The delivery log is the only idempotency guard; there is no "last run"
marker, so re-running a sweep on the same day sends nothing new. A failure
on one reservation is counted and logged and the sweep moves on. If the
log cannot be read the reservation is skipped for this sweep rather than
risking a duplicate.

A message that left the transport but whose record could not be appended
(a concurrent sweep won the race) is counted as an error.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.reservations.models import Reservation

from .log import DeliveryLog
from .models import DeliveryRecord
from .rules import NotificationRule, configured_rules
from .templates import BrandConfig, render, render_test
from .transports import DispatchResult, EmailTransport, Envelope, Transport, deliver

logger = logging.getLogger(__name__)


@dataclass
class SweepSummary:
    sent: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return {"sent": self.sent, "errors": self.errors}


def normalize_today(today=None) -> date:
    """Calendar day of the sweep; datetimes are reduced to the local date."""
    if today is None:
        return timezone.localdate()
    if isinstance(today, datetime):
        if timezone.is_aware(today):
            return timezone.localtime(today).date()
        return today.date()
    if isinstance(today, date):
        return today
    return date.fromisoformat(str(today))


def dispatch_notification(
    reservation,
    notification_type: str,
    *,
    log: DeliveryLog,
    transport: Transport,
    brand: BrandConfig,
) -> Optional[DeliveryRecord]:
    """
    Send one notification unless the log already has it

    Returns the appended record, or None when it was already delivered.
    Raises DeliveryLogUnavailable, DispatchFailed or DuplicateDeliveryError.
    """
    if log.exists(reservation.pk, notification_type):
        return None

    message = render(notification_type, reservation, brand)
    result = deliver(
        transport,
        Envelope(
            to=[reservation.guest_email],
            subject=message.subject,
            html=message.html,
            text=message.text,
            metadata={"reservation": str(reservation.pk), "type": notification_type},
        ),
    )
    record = log.append(
        DeliveryRecord(
            reservation=reservation,
            notification_type=notification_type,
            recipient=reservation.guest_email,
            message_id=result.message_id,
        )
    )
    logger.info(
        "Sent %s to %s for reservation %s",
        notification_type,
        reservation.guest_email,
        reservation.reference,
    )
    return record


class NotificationScheduler:
    """
    Collaborators are injectable so sweeps can run against fake transports

    Usage:
        summary = NotificationScheduler().run()
        print(summary.sent, summary.errors)
    """

    def __init__(
        self,
        rules: Optional[List[NotificationRule]] = None,
        log: Optional[DeliveryLog] = None,
        transport: Optional[Transport] = None,
        brand: Optional[BrandConfig] = None,
    ):
        self.rules = list(rules) if rules is not None else configured_rules()
        self.log = log or DeliveryLog()
        self.transport = transport or EmailTransport()
        self.brand = brand or BrandConfig.from_settings()

    def candidates(self, today: date) -> Iterable[Reservation]:
        """Non-cancelled reservations whose reference date matches some rule today"""
        if not self.rules:
            return Reservation.objects.none()
        due = Q()
        for rule in self.rules:
            reference = today - timedelta(days=rule.offset_days)
            due |= Q(**{rule.reference_field: reference})
        return (
            Reservation.objects.select_related("unit")
            .exclude(status=Reservation.Status.CANCELLED)
            .filter(due)
            .order_by("check_in", "id")
        )

    def run(self, today=None, cancel_event: Optional[threading.Event] = None) -> SweepSummary:
        today = normalize_today(today)
        summary = SweepSummary()
        logger.info("Running notification sweep for %s", today)

        for reservation in self.candidates(today):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Notification sweep cancelled")
                break
            try:
                for rule in self.rules:
                    if not rule.is_due(reservation, today):
                        continue
                    record = dispatch_notification(
                        reservation,
                        rule.notification_type,
                        log=self.log,
                        transport=self.transport,
                        brand=self.brand,
                    )
                    if record is not None:
                        summary.sent += 1
            except Exception as e:
                summary.errors += 1
                logger.error(
                    f"Failed to process notifications for reservation {reservation.pk}: {e}",
                    exc_info=True,
                )

        logger.info("Notification sweep finished: %s sent, %s errors", summary.sent, summary.errors)
        return summary


def send_test_notification(
    recipient: str,
    transport: Optional[Transport] = None,
    brand: Optional[BrandConfig] = None,
) -> DispatchResult:
    """Send a test message; no rules, no delivery log"""
    brand = brand or BrandConfig.from_settings()
    transport = transport or EmailTransport()
    message = render_test(brand)
    return transport.send(
        Envelope(
            to=[recipient],
            subject=message.subject,
            html=message.html,
            text=message.text,
            metadata={"type": "test"},
        )
    )
