"""End-to-end flow: inquiry, owner decision, customer notice, payment."""

from __future__ import annotations

import hashlib
import hmac
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

from django.core import mail
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User
from apps.venues.models import Venue


@override_settings(RAZORPAY_KEY_ID="rzp_test_key", RAZORPAY_KEY_SECRET="rzp_test_secret")
class BookingPaymentFlowTests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="secret123",
            name="Owner",
            mobile_number="9000000003",
            user_type=User.UserType.VENUE_OWNER,
            is_verified=True,
        )
        self.customer = User.objects.create_user(
            email="customer@example.com",
            password="secret123",
            name="Asha",
            mobile_number="9000000002",
            is_verified=True,
        )

    @patch("apps.payments.gateway.razorpay.Client")
    def test_inquiry_to_paid_booking(self, mocked_client) -> None:
        self.client.force_authenticate(self.owner)
        created = self.client.post(
            reverse("venue-list"),
            {
                "name": "Grand Palace",
                "description": "Banquet hall",
                "venue_type": "Banquet Hall",
                "location": "Mumbai",
                "capacity": 100,
                "price_min": "40000",
                "price_max": "60000",
            },
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        venue_id = created.data["venue_id"]

        self.client.force_authenticate(self.customer)
        inquiry = self.client.post(
            reverse("booking-inquiry"),
            {
                "venue_id": venue_id,
                "event_date": str(date.today() + timedelta(days=45)),
                "event_type": "Wedding",
                "guest_count": 80,
            },
            format="json",
        )
        self.assertEqual(inquiry.status_code, status.HTTP_201_CREATED, inquiry.data)
        booking_id = inquiry.data["inquiry_id"]

        self.client.force_authenticate(self.owner)
        self.assertEqual(
            self.client.get(reverse("booking-owner-inquiry-count")).data["inquiry_count"], 1
        )
        decision = self.client.put(
            reverse("booking-status", args=[booking_id]), {"status": "confirmed"}, format="json"
        )
        self.assertEqual(decision.status_code, status.HTTP_200_OK, decision.data)
        self.assertIn("customer@example.com", [m.to[0] for m in mail.outbox])

        self.client.force_authenticate(self.customer)
        self.assertEqual(
            self.client.get(reverse("booking-customer-notification-count")).data["unread_count"], 1
        )
        self.client.post(reverse("booking-customer-notifications-acknowledge"))

        mocked_client.return_value.order.create.return_value = {
            "id": "order_FLOW",
            "amount": 5900000,
            "currency": "INR",
        }
        order = self.client.post(reverse("payment-create-order"), {"booking_id": booking_id}, format="json")
        self.assertEqual(order.status_code, status.HTTP_200_OK, order.data)
        self.assertEqual(order.data["order"]["amount"], 5900000)

        signature = hmac.new(b"rzp_test_secret", b"order_FLOW|pay_FLOW", hashlib.sha256).hexdigest()
        verified = self.client.post(
            reverse("payment-verify"),
            {
                "booking_id": booking_id,
                "razorpay_order_id": "order_FLOW",
                "razorpay_payment_id": "pay_FLOW",
                "razorpay_signature": signature,
            },
            format="json",
        )
        self.assertEqual(verified.status_code, status.HTTP_200_OK, verified.data)
        self.assertEqual(
            self.client.get(reverse("booking-customer-notification-count")).data["unread_count"], 0
        )

        booking = Booking.objects.get(pk=booking_id)
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.COMPLETED)
        self.assertEqual(booking.payment_amount, Decimal("59000"))
        self.assertEqual(Venue.objects.get(pk=venue_id).total_bookings, 1)
