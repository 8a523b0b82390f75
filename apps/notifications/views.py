"""API views for notifications."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .models import DeliveryRecord
from .scheduler import NotificationScheduler, send_test_notification
from .serializers import DeliveryRecordSerializer, SweepRequestSerializer, TestNotificationSerializer


class DeliveryRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """Staff view of what was sent to whom."""

    queryset = DeliveryRecord.objects.select_related("reservation").all()
    serializer_class = DeliveryRecordSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["reservation", "notification_type"]


class RunSchedulerView(APIView):
    """Run the notification sweep now and report the counts."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = SweepRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        summary = NotificationScheduler().run(today=serializer.validated_data.get("date"))
        return Response(summary.to_dict(), status=status.HTTP_200_OK)


class TestNotificationView(APIView):
    """Send a test email, bypassing rules and the delivery log."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = TestNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        recipient = serializer.validated_data.get("recipient") or _default_recipient(request)
        if not recipient:
            return Response(
                {"detail": "No recipient configured."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        result = send_test_notification(recipient)
        if not result.success:
            return Response(
                {"success": False, "error": result.error},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response({"success": True, "recipient": recipient, "message_id": result.message_id})


def _default_recipient(request) -> str:
    admins = getattr(settings, "NOTIFICATION_ADMIN_EMAILS", [])
    if admins:
        return admins[0]
    return getattr(request.user, "email", "") or ""
