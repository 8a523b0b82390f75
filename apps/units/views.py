"""API views for units, their calendar and date selection."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.pricing.services import quote_for_unit
from apps.reservations.domain.selector import DateRangeSelector, Empty, RangeComplete
from apps.reservations.services import build_availability_index

from .models import Unit
from .serializers import BookedIntervalSerializer, SelectionSerializer, UnitSerializer


class UnitViewSet(viewsets.ReadOnlyModelViewSet):
    """Public unit catalogue."""

    queryset = Unit.objects.filter(is_active=True)
    serializer_class = UnitSerializer
    permission_classes = [permissions.AllowAny]
    filterset_fields = ["category"]

    @action(detail=True, methods=["get"])
    def calendar(self, request, pk=None):  # type: ignore
        """Booked intervals of the unit; checkout days are free."""
        unit: Unit = self.get_object()  # type: ignore
        index = build_availability_index([unit.pk])
        intervals = index.intervals_for(unit.pk)
        today = timezone.localdate()
        if request.query_params.get("include_past") not in ("1", "true"):
            intervals = [i for i in intervals if i.end > today]
        data = BookedIntervalSerializer(intervals, many=True).data
        return Response({"unit": unit.pk, "today": today, "booked": data})

    @action(detail=True, methods=["post"])
    def selection(self, request, pk=None):  # type: ignore
        """Advance the check-in/check-out selection by one click."""
        unit: Unit = self.get_object()  # type: ignore
        serializer = SelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        state = serializer.validated_data.get("state") or Empty()
        day = serializer.validated_data["date"]

        today = timezone.localdate()
        selector = DateRangeSelector(build_availability_index([unit.pk]), unit.pk, today)
        new_state = selector.select(state, day)

        payload = {"state": new_state.to_dict(), "quote": None}
        if isinstance(new_state, RangeComplete):
            payload["quote"] = quote_for_unit(
                unit, new_state.check_in, new_state.check_out, today=today
            ).to_dict()
        return Response(payload)
