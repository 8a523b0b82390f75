"""Admin registrations for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "unit",
        "guest_name",
        "check_in",
        "check_out",
        "nights",
        "total_price",
        "status",
        "payment_status",
    )
    list_filter = ("status", "payment_status", "payment_method", "unit")
    search_fields = ("reference", "guest_name", "guest_email")
    # Status and dates change through the API so availability is re-validated
    readonly_fields = (
        "reference",
        "unit",
        "check_in",
        "check_out",
        "nights",
        "total_price",
        "currency",
        "status",
        "payment_status",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "check_in"

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
