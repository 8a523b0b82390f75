"""Integration tests for reservation API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.reservations.models import Reservation
from apps.units.models import Unit


class ReservationAPITests(APITestCase):
    """Covers creation, conflicts and staff updates."""

    def setUp(self) -> None:
        self.unit = Unit.objects.create(name="Garden Suite", category="suite", base_rate=Decimal("450.00"))
        self.staff = get_user_model().objects.create_user(
            username="frontdesk", password="StaffPass123", is_staff=True
        )
        self.list_url = reverse("reservation-list")
        self.check_in = date.today() + timedelta(days=10)

    def _payload(self, check_in: date, check_out: date) -> dict[str, str]:
        return {
            "unit": str(self.unit.id),
            "guest_name": "Kwame Boateng",
            "guest_email": "kwame@example.com",
            "check_in": str(check_in),
            "check_out": str(check_out),
        }

    def test_guest_can_create_reservation(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.list_url,
                self._payload(self.check_in, self.check_in + timedelta(days=3)),
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["nights"], 3)
        self.assertEqual(Decimal(response.data["total_price"]), Decimal("1350.00"))
        self.assertNotIn("admin_notes", response.data)
        self.assertEqual(Reservation.objects.count(), 1)

    def test_overlap_returns_conflict(self) -> None:
        first = self.client.post(
            self.list_url,
            self._payload(self.check_in, self.check_in + timedelta(days=2)),
            format="json",
        )
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(
            self.list_url,
            self._payload(self.check_in + timedelta(days=1), self.check_in + timedelta(days=3)),
            format="json",
        )

        self.assertEqual(conflict.status_code, status.HTTP_409_CONFLICT, conflict.data)
        self.assertEqual(conflict.data["code"], "unavailable")
        self.assertEqual(Reservation.objects.count(), 1)

    def test_inverted_dates_are_bad_request(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(self.check_in, self.check_in),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_past_check_in_is_bad_request(self) -> None:
        today = timezone.localdate()
        response = self.client.post(
            self.list_url,
            self._payload(today - timedelta(days=30), today - timedelta(days=28)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(Reservation.objects.count(), 0)

    def test_check_in_today_is_accepted(self) -> None:
        today = timezone.localdate()
        response = self.client.post(
            self.list_url,
            self._payload(today, today + timedelta(days=1)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_listing_requires_staff(self) -> None:
        response = self.client.get(self.list_url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_staff_can_filter_and_update(self) -> None:
        self.client.post(self.list_url, self._payload(self.check_in, self.check_in + timedelta(days=2)), format="json")
        reservation = Reservation.objects.get()
        self.client.force_authenticate(self.staff)

        listing = self.client.get(self.list_url, {"unit": self.unit.pk, "status": "pending"})
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(len(listing.data), 1)

        detail_url = reverse("reservation-detail", args=[reservation.pk])
        response = self.client.patch(detail_url, {"status": "confirmed", "admin_notes": "VIP"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        reservation.refresh_from_db()
        self.assertEqual(reservation.status, Reservation.Status.CONFIRMED)
        self.assertEqual(reservation.admin_notes, "VIP")

    def test_invalid_transition_is_rejected(self) -> None:
        self.client.post(self.list_url, self._payload(self.check_in, self.check_in + timedelta(days=2)), format="json")
        reservation = Reservation.objects.get()
        self.client.force_authenticate(self.staff)
        detail_url = reverse("reservation-detail", args=[reservation.pk])

        response = self.client.patch(detail_url, {"status": "checked_out"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_transition")
