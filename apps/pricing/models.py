"""Persisted pricing rules."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PricingRule(models.Model):
    """A named rate adjustment, evaluated in ``position`` order."""

    class RuleType(models.TextChoices):
        SEASONAL = "seasonal", _("Seasonal")
        WEEKEND = "weekend", _("Weekend")
        LONG_STAY = "long_stay", _("Long stay")
        LAST_MINUTE = "last_minute", _("Last minute")
        CUSTOM = "custom", _("Custom")

    class AdjustmentType(models.TextChoices):
        PERCENTAGE = "percentage", _("Percentage")
        FIXED_AMOUNT = "fixed_amount", _("Fixed amount")

    name = models.CharField(max_length=255)
    rule_type = models.CharField(max_length=20, choices=RuleType.choices)
    adjustment_type = models.CharField(
        max_length=20,
        choices=AdjustmentType.choices,
        default=AdjustmentType.PERCENTAGE,
    )
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Signed: negative values are discounts."),
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    days_of_week = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Weekdays the rule applies to, 0=Monday ... 6=Sunday."),
    )
    min_nights = models.PositiveSmallIntegerField(null=True, blank=True)
    max_days_before_arrival = models.PositiveSmallIntegerField(null=True, blank=True)
    unit_categories = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Unit categories in scope; empty means all units."),
    )
    position = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Pricing rule")
        verbose_name_plural = _("Pricing rules")
        ordering = ["position", "id"]
        indexes = [
            models.Index(fields=["is_active", "position"], name="pricing_rule_active_pos_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_rule_type_display()})"

    def clean(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError(_("Start date must not be after end date."))
        if self.rule_type in (self.RuleType.SEASONAL, self.RuleType.CUSTOM):
            if not (self.start_date and self.end_date):
                raise ValidationError(_("Seasonal and custom rules need a date window."))
        if self.rule_type == self.RuleType.WEEKEND and not self.days_of_week:
            raise ValidationError(_("Weekend rules need at least one weekday."))
        if any(day not in range(7) for day in self.days_of_week or []):
            raise ValidationError(_("Weekdays must be between 0 and 6."))
        if self.rule_type == self.RuleType.LONG_STAY and not self.min_nights:
            raise ValidationError(_("Long stay rules need a minimum number of nights."))
        if self.rule_type == self.RuleType.LAST_MINUTE and self.max_days_before_arrival is None:
            raise ValidationError(_("Last minute rules need a booking window."))
