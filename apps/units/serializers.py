"""Serializers for units and date selection."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.reservations.domain.selector import state_from_dict

from .models import Unit


class UnitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Unit
        fields = [
            "id",
            "name",
            "category",
            "description",
            "base_rate",
            "currency",
            "max_guests",
            "is_active",
        ]
        read_only_fields = fields


class BookedIntervalSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()


class SelectionSerializer(serializers.Serializer):
    """One click on the calendar plus the state the client currently holds."""

    state = serializers.JSONField(required=False, allow_null=True)
    date = serializers.DateField()

    def validate_state(self, value):  # type: ignore
        if value is not None and not isinstance(value, dict):
            raise serializers.ValidationError("State must be an object.")
        try:
            return state_from_dict(value)
        except (KeyError, TypeError, ValueError) as exc:
            raise serializers.ValidationError(f"Invalid selection state: {exc}")
