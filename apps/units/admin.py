"""Admin registrations for units."""

from __future__ import annotations

from django.contrib import admin

from .models import Unit


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "base_rate", "currency", "max_guests", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("name", "category")
