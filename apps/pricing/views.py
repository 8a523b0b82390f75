"""API views for pricing."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.domain.value_objects import InvalidDateRange

from .models import PricingRule
from .serializers import PricingRuleSerializer, QuoteRequestSerializer
from .services import quote_for_unit


class QuoteView(APIView):
    """Price breakdown for a unit and a candidate stay."""

    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            breakdown = quote_for_unit(data["unit"], data["check_in"], data["check_out"])
        except InvalidDateRange as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"unit": data["unit"].pk, **breakdown.to_dict()})


class PricingRuleViewSet(viewsets.ModelViewSet):
    """Staff management of pricing rules."""

    queryset = PricingRule.objects.all()
    serializer_class = PricingRuleSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["rule_type", "is_active"]
