"""URL routing for notifications."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import DeliveryRecordViewSet, RunSchedulerView, TestNotificationView

router = DefaultRouter()
router.register(r'deliveries', DeliveryRecordViewSet, basename='delivery')

urlpatterns = [
    path('scheduler/run/', RunSchedulerView.as_view(), name='notification-scheduler-run'),
    path('test/', TestNotificationView.as_view(), name='notification-test'),
    path('', include(router.urls)),
]
