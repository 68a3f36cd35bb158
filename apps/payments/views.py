"""API views for Razorpay payments."""

from __future__ import annotations

import json
import logging

from django.conf import settings  # type: ignore
from django.utils.decorators import method_decorator  # type: ignore
from django.views.decorators.csrf import csrf_exempt  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from . import gateway, services
from .serializers import (
    BookingReferenceSerializer,
    PaymentFailedSerializer,
    PaymentStatusSerializer,
    VerifyPaymentSerializer,
)

logger = logging.getLogger(__name__)


def _not_configured_response() -> Response:
    return Response(
        {"error": "Payment gateway not configured. Please contact support."},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def _customer_booking(user, booking_id: int, **filters) -> Booking:
    booking = (
        Booking.objects.select_related("venue")
        .filter(pk=booking_id, customer=user, **filters)
        .first()
    )
    if booking is None:
        raise NotFound("Booking not found")
    return booking


class CreateOrderView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        if not gateway.is_configured():
            return _not_configured_response()
        serializer = BookingReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking_id = serializer.validated_data["booking_id"]
        booking = (
            Booking.objects.select_related("venue")
            .filter(pk=booking_id, customer=request.user, status=Booking.Status.CONFIRMED)
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found or not confirmed")

        try:
            order = services.create_order(booking)
        except services.PaymentError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except gateway.PaymentGatewayNotConfigured:
            return _not_configured_response()
        except gateway.PaymentGatewayError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response({"success": True, "order": order, "key_id": settings.RAZORPAY_KEY_ID})


class VerifyPaymentView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        if not gateway.is_configured():
            return _not_configured_response()
        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = _customer_booking(
            request.user,
            data["booking_id"],
            razorpay_order_id=data["razorpay_order_id"],
        )
        try:
            services.verify_payment(
                booking,
                data["razorpay_order_id"],
                data["razorpay_payment_id"],
                data["razorpay_signature"],
            )
        except services.InvalidPaymentSignature as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {
                "success": True,
                "message": "Payment verified successfully",
                "payment_id": data["razorpay_payment_id"],
            }
        )


class PaymentStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, booking_id: int):  # type: ignore
        booking = _customer_booking(request.user, booking_id)
        return Response(PaymentStatusSerializer(booking).data)


class PaymentFailedView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = PaymentFailedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = _customer_booking(request.user, serializer.validated_data["booking_id"])
        try:
            services.mark_failed(booking, serializer.validated_data["error_description"])
        except services.PaymentError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "message": "Payment failure recorded"})


@method_decorator(csrf_exempt, name="dispatch")
class RazorpayWebhookView(APIView):
    """Server-to-server payment events, authenticated by the webhook signature."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        body = request.body
        signature = request.headers.get("X-Razorpay-Signature")
        if not gateway.verify_webhook_signature(body, signature):
            logger.warning("Rejected Razorpay webhook with an invalid signature")
            return Response({"error": "Invalid signature"}, status=status.HTTP_403_FORBIDDEN)

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return Response({"error": "Invalid JSON"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            outcome = services.handle_webhook_event(payload)
        except services.PaymentError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"status": "ok", "outcome": outcome})
