"""Unit domain models for Quarters."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def default_currency() -> str:
    return getattr(settings, "QUARTERS_CURRENCY", "USD")


class Unit(models.Model):
    """A bookable room or apartment with a flat nightly base rate."""

    name = models.CharField(max_length=255)
    category = models.CharField(
        max_length=50,
        blank=True,
        help_text=_("Category used to scope pricing rules (e.g. suite, standard)."),
    )
    description = models.TextField(blank=True)
    base_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Nightly rate before adjustments."),
    )
    currency = models.CharField(max_length=3, default=default_currency)
    max_guests = models.PositiveSmallIntegerField(default=2)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Unit")
        verbose_name_plural = _("Units")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="unit_active_category_idx"),
        ]

    def __str__(self) -> str:
        return self.name
