"""Serializers for reservations."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.units.models import Unit

from .models import Reservation


class ReservationCreateSerializer(serializers.Serializer):
    """Guest-facing input; the price is always computed server-side."""

    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.filter(is_active=True))
    guest_name = serializers.CharField(max_length=255)
    guest_email = serializers.EmailField()
    guest_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    payment_method = serializers.ChoiceField(
        choices=Reservation.PaymentMethod.choices,
        default=Reservation.PaymentMethod.CASH,
    )

    def validate(self, attrs):  # type: ignore
        if attrs["check_in"] >= attrs["check_out"]:
            raise serializers.ValidationError("Check-out must be after check-in.")
        return attrs


class ReservationUpdateSerializer(serializers.Serializer):
    """Staff patch of the mutable fields."""

    status = serializers.ChoiceField(choices=Reservation.Status.choices, required=False)
    payment_status = serializers.ChoiceField(choices=Reservation.PaymentStatus.choices, required=False)
    admin_notes = serializers.CharField(required=False, allow_blank=True)


class ReservationSerializer(serializers.ModelSerializer):
    unit_name = serializers.ReadOnlyField(source="unit.name")

    class Meta:
        model = Reservation
        fields = [
            "id",
            "reference",
            "unit",
            "unit_name",
            "guest_name",
            "guest_email",
            "guest_phone",
            "check_in",
            "check_out",
            "nights",
            "total_price",
            "currency",
            "status",
            "payment_status",
            "payment_method",
            "admin_notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class GuestReservationSerializer(serializers.ModelSerializer):
    """What the guest sees after confirming."""

    class Meta:
        model = Reservation
        fields = [
            "id",
            "reference",
            "unit",
            "guest_name",
            "check_in",
            "check_out",
            "nights",
            "total_price",
            "currency",
            "status",
            "payment_status",
            "payment_method",
        ]
        read_only_fields = fields
