"""
Delivery Log

Append-only record of which notification types were sent for which
reservation. ``exists`` answers the dedupe question; ``append`` inserts a
record and leans on the database unique constraint, so a second append for
the same key fails even when two sweeps race.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError, IntegrityError, transaction  # type: ignore

from .exceptions import DeliveryLogUnavailable, DuplicateDeliveryError
from .models import DeliveryRecord

logger = logging.getLogger(__name__)


class DeliveryLog:
    """No update or delete operations are offered."""

    def exists(self, reservation_id, notification_type: str) -> bool:
        try:
            return DeliveryRecord.objects.filter(
                reservation_id=reservation_id,
                notification_type=notification_type,
            ).exists()
        except DatabaseError as exc:
            raise DeliveryLogUnavailable(str(exc)) from exc

    def append(self, record: DeliveryRecord) -> DeliveryRecord:
        if record.pk is not None:
            raise ValueError("Delivery records are append-only")
        try:
            with transaction.atomic():
                record.save(force_insert=True)
        except IntegrityError as exc:
            logger.warning(
                "Duplicate delivery of %s for reservation %s",
                record.notification_type,
                record.reservation_id,
            )
            raise DuplicateDeliveryError(
                f"{record.notification_type} already delivered for reservation {record.reservation_id}"
            ) from exc
        return record
