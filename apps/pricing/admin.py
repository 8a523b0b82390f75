"""Admin registrations for pricing."""

from __future__ import annotations

from django.contrib import admin

from .models import PricingRule


@admin.register(PricingRule)
class PricingRuleAdmin(admin.ModelAdmin):
    list_display = ("name", "rule_type", "adjustment_type", "value", "position", "is_active")
    list_filter = ("rule_type", "adjustment_type", "is_active")
    list_editable = ("position", "is_active")
    search_fields = ("name",)
    ordering = ("position", "id")
