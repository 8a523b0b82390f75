import threading
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.notifications.exceptions import DeliveryLogUnavailable
from apps.notifications.log import DeliveryLog
from apps.notifications.models import DeliveryRecord
from apps.notifications.rules import NotificationRule
from apps.notifications.scheduler import NotificationScheduler, normalize_today
from apps.notifications.tasks import run_notification_sweep
from apps.notifications.templates import BrandConfig
from apps.notifications.transports import DispatchResult, Transport
from apps.reservations.models import Reservation
from apps.units.models import Unit

TODAY = date(2030, 3, 1)


class RecordingTransport(Transport):
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send(self, envelope):
        if set(envelope.to) & self.fail_for:
            return DispatchResult(success=False, error="mailbox unavailable")
        self.sent.append(envelope)
        return DispatchResult(success=True, message_id=f"<{len(self.sent)}@test>")


class BrokenLog(DeliveryLog):
    def exists(self, reservation_id, notification_type):
        raise DeliveryLogUnavailable("database is away")


@pytest.fixture
def unit(db):
    return Unit.objects.create(name="Harbour Room", base_rate=Decimal("200.00"))


def make_reservation(unit, check_in, nights=2, email="guest@example.com", **extra):
    return Reservation.objects.create(
        unit=unit,
        guest_name="Guest",
        guest_email=email,
        check_in=check_in,
        check_out=check_in + timedelta(days=nights),
        **extra,
    )


def scheduler(transport, log=None):
    return NotificationScheduler(transport=transport, log=log, brand=BrandConfig(name="Quarters"))


def test_pre_arrival_sent_two_days_before_check_in(unit):
    reservation = make_reservation(unit, TODAY + timedelta(days=2))
    transport = RecordingTransport()

    summary = scheduler(transport).run(today=TODAY)

    assert summary.to_dict() == {"sent": 1, "errors": 0}
    assert transport.sent[0].subject == "Your Stay at Quarters is Just 2 Days Away!"
    record = DeliveryRecord.objects.get()
    assert record.reservation == reservation
    assert record.notification_type == "pre-arrival"
    assert record.message_id == "<1@test>"


def test_review_request_sent_two_days_after_check_out(unit):
    make_reservation(unit, TODAY - timedelta(days=5), nights=3)
    transport = RecordingTransport()

    summary = scheduler(transport).run(today=TODAY)

    assert summary.sent == 1
    assert DeliveryRecord.objects.get().notification_type == "review-request"


def test_second_sweep_sends_nothing(unit):
    make_reservation(unit, TODAY + timedelta(days=2))
    transport = RecordingTransport()

    first = scheduler(transport).run(today=TODAY)
    second = scheduler(transport).run(today=TODAY)

    assert first.sent == 1
    assert second.to_dict() == {"sent": 0, "errors": 0}
    assert len(transport.sent) == 1


def test_cancelled_and_not_due_reservations_are_ignored(unit):
    make_reservation(unit, TODAY + timedelta(days=2), status=Reservation.Status.CANCELLED)
    make_reservation(unit, TODAY + timedelta(days=3), nights=1, email="later@example.com")
    transport = RecordingTransport()

    summary = scheduler(transport).run(today=TODAY)

    assert summary.to_dict() == {"sent": 0, "errors": 0}
    assert transport.sent == []


def test_failure_is_counted_and_sweep_continues(unit):
    make_reservation(unit, TODAY + timedelta(days=2), email="bounce@example.com")
    make_reservation(unit, TODAY + timedelta(days=2) + timedelta(days=2), email="never@example.com")
    other = Unit.objects.create(name="Garden Room", base_rate=Decimal("150.00"))
    make_reservation(other, TODAY + timedelta(days=2), email="ok@example.com")
    transport = RecordingTransport(fail_for={"bounce@example.com"})

    summary = scheduler(transport).run(today=TODAY)

    assert summary.to_dict() == {"sent": 1, "errors": 1}
    assert [e.to for e in transport.sent] == [["ok@example.com"]]
    assert DeliveryRecord.objects.filter(recipient="bounce@example.com").count() == 0


def test_failed_delivery_is_retried_next_sweep(unit):
    make_reservation(unit, TODAY + timedelta(days=2), email="bounce@example.com")

    assert scheduler(RecordingTransport(fail_for={"bounce@example.com"})).run(today=TODAY).errors == 1
    assert scheduler(RecordingTransport()).run(today=TODAY).sent == 1


def test_unreadable_log_skips_reservation(unit):
    make_reservation(unit, TODAY + timedelta(days=2))
    transport = RecordingTransport()

    summary = scheduler(transport, log=BrokenLog()).run(today=TODAY)

    assert summary.to_dict() == {"sent": 0, "errors": 1}
    assert transport.sent == []


def test_cancel_event_stops_between_reservations(unit):
    make_reservation(unit, TODAY + timedelta(days=2))
    cancel = threading.Event()
    cancel.set()
    transport = RecordingTransport()

    summary = scheduler(transport).run(today=TODAY, cancel_event=cancel)

    assert summary.sent == 0
    assert transport.sent == []


def test_custom_rules_are_honoured(unit):
    make_reservation(unit, TODAY + timedelta(days=7))
    rules = [NotificationRule("pre-arrival", "check_in", -7)]
    transport = RecordingTransport()

    summary = NotificationScheduler(rules=rules, transport=transport).run(today=TODAY)

    assert summary.sent == 1


def test_today_is_normalized():
    assert normalize_today(datetime(2030, 3, 1, 23, 59)) == TODAY
    assert normalize_today("2030-03-01") == TODAY
    assert normalize_today(TODAY) == TODAY


def test_rule_day_delta_sign():
    rule = NotificationRule("pre-arrival", "check_in", -2)
    reservation = Reservation(check_in=TODAY + timedelta(days=2), check_out=TODAY + timedelta(days=4))

    assert rule.day_delta(reservation, TODAY) == -2
    assert rule.is_due(reservation, TODAY)
    with pytest.raises(ValueError):
        NotificationRule("pre-arrival", "created_at", -2)


@pytest.mark.django_db
def test_task_and_command_use_default_email_transport(unit, mailoutbox):
    today = timezone.localdate()
    make_reservation(unit, today + timedelta(days=2), email="task@example.com")

    result = run_notification_sweep.apply().get()
    call_command("run_notification_sweep", "--date", today.isoformat())

    assert result == {"sent": 1, "errors": 0}
    assert len(mailoutbox) == 1
    assert mailoutbox[0].alternatives[0][1] == "text/html"
