"""Serializers for the delivery log and admin triggers."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import DeliveryRecord


class DeliveryRecordSerializer(serializers.ModelSerializer):
    reservation_reference = serializers.ReadOnlyField(source="reservation.reference")

    class Meta:
        model = DeliveryRecord
        fields = [
            "id",
            "reservation",
            "reservation_reference",
            "notification_type",
            "dispatched_at",
            "status",
            "recipient",
            "message_id",
        ]
        read_only_fields = fields


class SweepRequestSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class TestNotificationSerializer(serializers.Serializer):
    recipient = serializers.EmailField(required=False)
