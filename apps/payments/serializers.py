"""Serializers for payment requests."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking


class BookingReferenceSerializer(serializers.Serializer):
    """Accepts ``booking_id`` as well as the checkout widget's ``bookingId``."""

    booking_id = serializers.IntegerField(
        error_messages={"invalid": "Invalid booking id", "required": "Invalid booking id"}
    )

    def to_internal_value(self, data):  # type: ignore
        if hasattr(data, "get") and data.get("booking_id") is None and data.get("bookingId") is not None:
            data = {**data, "booking_id": data["bookingId"]}
        return super().to_internal_value(data)


class VerifyPaymentSerializer(BookingReferenceSerializer):
    razorpay_order_id = serializers.CharField(max_length=64)
    razorpay_payment_id = serializers.CharField(max_length=64)
    razorpay_signature = serializers.CharField(max_length=256)


class PaymentFailedSerializer(BookingReferenceSerializer):
    error_description = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentStatusSerializer(serializers.ModelSerializer):
    booking_id = serializers.ReadOnlyField(source="id")

    class Meta:
        model = Booking
        fields = [
            "booking_id",
            "status",
            "payment_status",
            "amount",
            "payment_amount",
            "razorpay_order_id",
            "razorpay_payment_id",
            "payment_completed_at",
            "payment_error_description",
        ]
        read_only_fields = fields
