"""Event handlers sending the immediate guest emails."""

from __future__ import annotations

import logging

from apps.reservations.domain.events import ReservationCreated, ReservationPaid
from apps.reservations.models import Reservation
from shared.application.message_bus import message_bus

from .log import DeliveryLog
from .rules import CONFIRMATION, PAYMENT_RECEIPT
from .scheduler import dispatch_notification
from .templates import BrandConfig
from .transports import EmailTransport

logger = logging.getLogger(__name__)


def _send(reservation_id: int, notification_type: str) -> None:
    reservation = Reservation.objects.select_related("unit").get(pk=reservation_id)
    dispatch_notification(
        reservation,
        notification_type,
        log=DeliveryLog(),
        transport=EmailTransport(),
        brand=BrandConfig.from_settings(),
    )


def handle_reservation_created(event: ReservationCreated) -> None:
    """Send the booking confirmation"""
    _send(event.reservation_id, CONFIRMATION)


def handle_reservation_paid(event: ReservationPaid) -> None:
    """Send the payment receipt"""
    _send(event.reservation_id, PAYMENT_RECEIPT)


def register_handlers() -> None:
    message_bus.register_event_handler(ReservationCreated, handle_reservation_created)
    message_bus.register_event_handler(ReservationPaid, handle_reservation_paid)
    logger.debug("Notification event handlers registered")
