"""Celery tasks for guest notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .scheduler import NotificationScheduler

logger = logging.getLogger(__name__)


@shared_task(name="notifications.run_notification_sweep")
def run_notification_sweep(today: str | None = None) -> dict:
    """Daily sweep for pre-arrival and review-request emails."""

    summary = NotificationScheduler().run(today=today)
    logger.info("Scheduled notification sweep: %s", summary.to_dict())
    return summary.to_dict()
