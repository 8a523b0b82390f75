"""FilterSet for the staff reservation listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Reservation


class ReservationFilterSet(django_filters.FilterSet):
    unit = django_filters.NumberFilter(field_name="unit_id", lookup_expr="exact")
    status = django_filters.MultipleChoiceFilter(choices=Reservation.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Reservation.PaymentStatus.choices)
    # Stays overlapping [date_from, date_to)
    date_from = django_filters.DateFilter(field_name="check_out", lookup_expr="gt")
    date_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lt")
    reference = django_filters.CharFilter(field_name="reference", lookup_expr="iexact")
    email = django_filters.CharFilter(field_name="guest_email", lookup_expr="iexact")

    class Meta:
        model = Reservation
        fields = ["unit", "status", "payment_status", "reference"]
