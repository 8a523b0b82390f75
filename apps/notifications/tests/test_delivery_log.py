from datetime import date
from decimal import Decimal

import pytest

from apps.notifications.exceptions import DuplicateDeliveryError
from apps.notifications.log import DeliveryLog
from apps.notifications.models import DeliveryRecord
from apps.reservations.models import Reservation
from apps.units.models import Unit


@pytest.fixture
def reservation(db):
    unit = Unit.objects.create(name="Loft", base_rate=Decimal("120.00"))
    return Reservation.objects.create(
        unit=unit,
        guest_name="Abena",
        guest_email="abena@example.com",
        check_in=date(2030, 1, 10),
        check_out=date(2030, 1, 12),
    )


def record(reservation, notification_type="pre-arrival"):
    return DeliveryRecord(
        reservation=reservation,
        notification_type=notification_type,
        recipient=reservation.guest_email,
    )


def test_append_then_exists(reservation):
    log = DeliveryLog()
    assert not log.exists(reservation.pk, "pre-arrival")

    log.append(record(reservation))

    assert log.exists(reservation.pk, "pre-arrival")
    assert not log.exists(reservation.pk, "review-request")


def test_second_append_for_same_key_fails(reservation):
    log = DeliveryLog()
    log.append(record(reservation))

    with pytest.raises(DuplicateDeliveryError):
        log.append(record(reservation))
    assert DeliveryRecord.objects.count() == 1


def test_append_refuses_saved_records(reservation):
    log = DeliveryLog()
    saved = log.append(record(reservation))

    with pytest.raises(ValueError):
        log.append(saved)
