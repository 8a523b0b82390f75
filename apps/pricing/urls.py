"""URL routing for pricing."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PricingRuleViewSet, QuoteView

router = DefaultRouter()
router.register(r"rules", PricingRuleViewSet, basename="pricing-rule")

urlpatterns = [
    path("quote/", QuoteView.as_view(), name="pricing-quote"),
    path("", include(router.urls)),
]
