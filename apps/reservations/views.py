"""API views for reservations."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.value_objects import InvalidDateRange

from .exceptions import InvalidStatusTransition, ReservationUnavailableError
from .filters import ReservationFilterSet
from .models import Reservation
from .serializers import (
    GuestReservationSerializer,
    ReservationCreateSerializer,
    ReservationSerializer,
    ReservationUpdateSerializer,
)
from .services import create_reservation, update_reservation


class ReservationViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Public creation; listing and updates are for staff."""

    queryset = Reservation.objects.select_related("unit").all()
    filterset_class = ReservationFilterSet
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReservationCreateSerializer
        if self.action == "partial_update":
            return ReservationUpdateSerializer
        return ReservationSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            reservation = create_reservation(serializer.validated_data)
        except ReservationUnavailableError as exc:
            return Response(
                {"code": ReservationUnavailableError.code, "detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )
        except InvalidDateRange as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        read_serializer = GuestReservationSerializer(reservation, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        reservation: Reservation = self.get_object()  # type: ignore
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            reservation = update_reservation(reservation.pk, serializer.validated_data)
        except InvalidStatusTransition as exc:
            return Response({"code": "invalid_transition", "detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ReservationUnavailableError as exc:
            return Response(
                {"code": ReservationUnavailableError.code, "detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(ReservationSerializer(reservation).data)
