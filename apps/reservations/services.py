"""Reservation store: the only writer of reservations."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.pricing.services import quote_for_unit
from apps.units.models import Unit
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange, InvalidDateRange

from .domain.availability import AvailabilityIndex
from .domain.events import ReservationCreated, ReservationPaid
from .exceptions import InvalidStatusTransition, ReservationUnavailableError
from .models import Reservation

logger = logging.getLogger(__name__)

Status = Reservation.Status

ALLOWED_TRANSITIONS: Mapping[str, frozenset] = {
    Status.PENDING: frozenset({Status.CONFIRMED, Status.ARRIVED, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.PENDING, Status.ARRIVED, Status.CANCELLED}),
    Status.ARRIVED: frozenset({Status.CHECKED_OUT}),
    Status.CHECKED_OUT: frozenset(),
    Status.CANCELLED: frozenset({Status.PENDING, Status.CONFIRMED}),
}

UPDATABLE_FIELDS = ("status", "payment_status", "admin_notes")


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def ensure_unit_is_available(unit_id, check_in, check_out, *, exclude_reservation_id=None) -> None:
    """Raise if any active reservation occupies a night of ``[check_in, check_out)``."""

    DateRange(check_in, check_out)

    overlapping = Reservation.objects.filter(unit_id=unit_id).exclude(
        status=Status.CANCELLED,
    ).filter(Q(check_in__lt=check_out) & Q(check_out__gt=check_in))

    if exclude_reservation_id is not None:
        overlapping = overlapping.exclude(pk=exclude_reservation_id)

    if overlapping.exists():
        raise ReservationUnavailableError("Unit is not available for the selected dates.")


def build_availability_index(unit_ids: Iterable | None = None) -> AvailabilityIndex:
    """Snapshot of booked intervals, optionally limited to some units."""

    qs = Reservation.objects.exclude(status=Status.CANCELLED).only(
        "id", "unit_id", "check_in", "check_out", "status"
    )
    if unit_ids is not None:
        qs = qs.filter(unit_id__in=list(unit_ids))
    return AvailabilityIndex.from_reservations(qs)


def list_reservations(*, unit_id=None, status=None, active_only: bool = False):
    """Reservations ordered by check-in, optionally filtered."""

    qs = Reservation.objects.select_related("unit")
    if unit_id is not None:
        qs = qs.filter(unit_id=unit_id)
    if status is not None:
        qs = qs.filter(status=status)
    if active_only:
        qs = qs.exclude(status=Status.CANCELLED)
    return qs.order_by("check_in", "id")


def create_reservation(data: Mapping) -> Reservation:
    """
    Persist a new reservation after re-validating availability.

    The unit row is locked for the duration of the transaction so two
    guests confirming overlapping stays cannot both succeed. The price is
    recomputed server-side from the active rules.
    Check-in dates before today are rejected like any other blocked date.
    """

    unit = data["unit"]
    unit_id = getattr(unit, "pk", unit)
    check_in = data["check_in"]
    check_out = data["check_out"]
    DateRange(check_in, check_out)
    today = timezone.localdate()
    if check_in < today:
        raise InvalidDateRange(f"Check-in ({check_in}) is before today ({today})")

    with DjangoUnitOfWork() as uow:
        unit = _lock_queryset_if_possible(Unit.objects.filter(pk=unit_id)).get()
        ensure_unit_is_available(unit.pk, check_in, check_out)

        breakdown = quote_for_unit(unit, check_in, check_out, today=today)
        reservation = Reservation.objects.create(
            unit=unit,
            guest_name=data["guest_name"],
            guest_email=data["guest_email"],
            guest_phone=data.get("guest_phone", ""),
            check_in=check_in,
            check_out=check_out,
            total_price=breakdown.total.amount,
            currency=breakdown.currency,
            payment_method=data.get("payment_method", Reservation.PaymentMethod.CASH),
        )
        uow.add_event(ReservationCreated(reservation_id=reservation.pk, unit_id=unit.pk))

    logger.info(
        "Reservation %s created for unit %s (%s..%s)",
        reservation.reference,
        unit.pk,
        check_in,
        check_out,
    )
    return reservation


def update_reservation(reservation_id, patch: Mapping) -> Reservation:
    """
    Apply a staff patch to status, payment status or notes.

    Status changes follow ``ALLOWED_TRANSITIONS``; reactivating a cancelled
    reservation re-validates availability the same way creation does.
    """

    unknown = set(patch) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

    with DjangoUnitOfWork() as uow:
        reservation = _lock_queryset_if_possible(
            Reservation.objects.filter(pk=reservation_id)
        ).get()
        previous_status = reservation.status
        previous_payment = reservation.payment_status

        new_status = patch.get("status", previous_status)
        if new_status != previous_status:
            if new_status not in ALLOWED_TRANSITIONS.get(previous_status, frozenset()):
                raise InvalidStatusTransition(previous_status, new_status)
            if previous_status == Status.CANCELLED:
                _lock_queryset_if_possible(Unit.objects.filter(pk=reservation.unit_id)).get()
                ensure_unit_is_available(
                    reservation.unit_id,
                    reservation.check_in,
                    reservation.check_out,
                    exclude_reservation_id=reservation.pk,
                )

        for field in UPDATABLE_FIELDS:
            if field in patch:
                setattr(reservation, field, patch[field])
        reservation.save()

        if (
            reservation.payment_status == Reservation.PaymentStatus.PAID
            and previous_payment != Reservation.PaymentStatus.PAID
        ):
            uow.add_event(ReservationPaid(reservation_id=reservation.pk))

    if reservation.status != previous_status:
        logger.info(
            "Reservation %s moved from %s to %s",
            reservation.reference,
            previous_status,
            reservation.status,
        )
    return reservation
