"""Payment flows for confirmed bookings."""

from __future__ import annotations

import logging
import time

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from shared.domain.value_objects import Money
from . import gateway

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """A payment request that cannot be honoured for this booking."""


class InvalidPaymentSignature(PaymentError):
    pass


def _receipt_for(booking: Booking) -> str:
    return f"b_{str(booking.id)[-8:]}_{str(int(time.time() * 1000))[-8:]}"


def create_order(booking: Booking) -> dict:
    """Open a gateway order for the GST-inclusive amount of a confirmed booking."""
    if booking.razorpay_order_id:
        raise PaymentError("Payment order already exists for this booking")

    amount = booking.chargeable_amount
    if amount is None or amount <= 0:
        raise PaymentError("Invalid payment amount for booking")
    amount_minor = Money(amount, settings.PAYMENT_CURRENCY).to_minor_units()
    if amount_minor < settings.PAYMENT_MIN_AMOUNT_MINOR:
        raise PaymentError("Payment amount must be at least ₹1.00")

    venue_name = booking.venue.name
    order = gateway.create_order(
        amount_minor,
        _receipt_for(booking),
        {
            "booking_id": str(booking.id),
            "venue_name": venue_name[:60],
            "customer_id": str(booking.customer_id),
            "event_date": booking.event_date.isoformat(),
            "display_amount": str(booking.amount),
            "payment_amount": str(amount),
        },
    )

    booking.razorpay_order_id = order["id"]
    booking.payment_status = Booking.PaymentStatus.PENDING
    booking.save(update_fields=["razorpay_order_id", "payment_status", "updated_at"])
    return {
        "id": order["id"],
        "amount": order.get("amount", amount_minor),
        "currency": order.get("currency", settings.PAYMENT_CURRENCY),
        "booking_id": booking.id,
        "venue_name": venue_name,
    }


def mark_completed(booking: Booking, payment_id: str) -> Booking:
    booking.payment_status = Booking.PaymentStatus.COMPLETED
    booking.razorpay_payment_id = payment_id
    booking.payment_completed_at = timezone.now()
    booking.save(
        update_fields=["payment_status", "razorpay_payment_id", "payment_completed_at", "updated_at"]
    )
    logger.info(f"Payment {payment_id} completed for booking {booking.id}")
    return booking


def mark_failed(booking: Booking, description: str, *, payment_id: str = "") -> Booking:
    """Record a failed attempt. A completed payment is never downgraded."""
    if booking.payment_status == Booking.PaymentStatus.COMPLETED:
        raise PaymentError("Payment already completed for this booking")
    booking.payment_status = Booking.PaymentStatus.FAILED
    booking.payment_error_description = description or ""
    update_fields = ["payment_status", "payment_error_description", "updated_at"]
    if payment_id:
        booking.razorpay_payment_id = payment_id
        update_fields.append("razorpay_payment_id")
    booking.save(update_fields=update_fields)
    logger.info(f"Payment failure recorded for booking {booking.id}: {description}")
    return booking


def verify_payment(booking: Booking, order_id: str, payment_id: str, signature: str) -> Booking:
    """Complete the payment when the checkout signature checks out.

    A bad signature leaves the booking untouched.
    """
    if not gateway.verify_payment_signature(order_id, payment_id, signature):
        logger.warning(f"Invalid payment signature for booking {booking.id}, order {order_id}")
        raise InvalidPaymentSignature("Invalid payment signature")
    return mark_completed(booking, payment_id)


def handle_webhook_event(payload: dict) -> str:
    """Apply a verified Razorpay webhook event and say what was done with it."""
    event = payload.get("event", "")
    entities = payload.get("payload", {})
    payment = entities.get("payment", {}).get("entity", {})
    order = entities.get("order", {}).get("entity", {})
    order_id = payment.get("order_id") or order.get("id")

    if event not in {"payment.captured", "order.paid", "payment.failed"}:
        return "ignored"
    if not order_id:
        raise PaymentError("Webhook payload carries no order id")

    booking = Booking.objects.filter(razorpay_order_id=order_id).first()
    if booking is None:
        logger.warning(f"Webhook {event} for unknown order {order_id}")
        return "unknown_order"

    if event == "payment.failed":
        if booking.payment_status != Booking.PaymentStatus.COMPLETED:
            mark_failed(booking, payment.get("error_description", ""), payment_id=payment.get("id", ""))
        return "failed"

    if booking.payment_status != Booking.PaymentStatus.COMPLETED:
        mark_completed(booking, payment.get("id", "") or booking.razorpay_payment_id)
    return "completed"
