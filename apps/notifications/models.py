"""Delivery log model.

One row per message that left the system for a reservation. Rows are only
ever inserted; the unique constraint on ``(reservation, notification_type)``
is what makes delivery at-most-once, including across concurrent sweeps.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class DeliveryRecord(models.Model):
    """A notification that was handed to the transport."""

    class Status(models.TextChoices):
        SENT = "sent", _("Sent")

    reservation = models.ForeignKey(
        "reservations.Reservation",
        on_delete=models.PROTECT,
        related_name="deliveries",
    )
    notification_type = models.CharField(max_length=50)
    dispatched_at = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SENT)
    recipient = models.EmailField()
    message_id = models.CharField(max_length=255, blank=True)

    class Meta:
        verbose_name = _("Delivery record")
        verbose_name_plural = _("Delivery records")
        ordering = ["-dispatched_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["reservation", "notification_type"],
                name="delivery_once_per_type",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.notification_type} for reservation {self.reservation_id}"
