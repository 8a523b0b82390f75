"""Admin registrations for the delivery log."""

from __future__ import annotations

from django.contrib import admin

from .models import DeliveryRecord


@admin.register(DeliveryRecord)
class DeliveryRecordAdmin(admin.ModelAdmin):
    list_display = ("reservation", "notification_type", "recipient", "status", "dispatched_at")
    list_filter = ("notification_type", "status")
    search_fields = ("reservation__reference", "recipient")
    readonly_fields = (
        "reservation",
        "notification_type",
        "dispatched_at",
        "status",
        "recipient",
        "message_id",
    )

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
