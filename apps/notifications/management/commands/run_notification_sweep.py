from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError  # type: ignore

from apps.notifications.scheduler import NotificationScheduler


class Command(BaseCommand):
    help = "Send due pre-arrival and review-request emails"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument(
            "--date",
            dest="today",
            help="Run the sweep as of this date (YYYY-MM-DD); defaults to today.",
        )

    def handle(self, *args, **options):  # type: ignore
        today = options.get("today")
        if today:
            try:
                today = date.fromisoformat(today)
            except ValueError as exc:
                raise CommandError(f"Invalid date: {today}") from exc

        summary = NotificationScheduler().run(today=today)
        self.stdout.write(
            self.style.SUCCESS(f"Sent {summary.sent} notification(s), {summary.errors} error(s)")
        )
