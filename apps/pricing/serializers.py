"""Serializers for pricing rules and quotes."""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.units.models import Unit

from .models import PricingRule


class PricingRuleSerializer(serializers.ModelSerializer):
    """CRUD serializer used by staff."""

    days_of_week = serializers.ListField(
        child=serializers.IntegerField(min_value=0, max_value=6),
        required=False,
    )
    unit_categories = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )

    class Meta:
        model = PricingRule
        fields = [
            "id",
            "name",
            "rule_type",
            "adjustment_type",
            "value",
            "start_date",
            "end_date",
            "days_of_week",
            "min_nights",
            "max_days_before_arrival",
            "unit_categories",
            "position",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):  # type: ignore
        instance = PricingRule(**{**self._current_values(), **attrs})
        try:
            instance.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages)
        return attrs

    def _current_values(self) -> dict:
        if self.instance is None:
            return {}
        return {
            field: getattr(self.instance, field)
            for field in self.Meta.fields
            if field not in self.Meta.read_only_fields
        }


class QuoteRequestSerializer(serializers.Serializer):
    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.filter(is_active=True))
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_in"] >= attrs["check_out"]:
            raise serializers.ValidationError("Check-out must be after check-in.")
        return attrs
