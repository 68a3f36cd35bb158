"""
Razorpay gateway integration.

Orders are created through the Razorpay SDK. Checkout signatures and
webhook signatures are verified locally with HMAC-SHA256.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

import razorpay  # type: ignore
import requests  # type: ignore
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """The gateway refused or failed to create an order."""


class PaymentGatewayNotConfigured(PaymentGatewayError):
    """Razorpay keys are missing from the environment."""


def is_configured() -> bool:
    return bool(settings.RAZORPAY_KEY_ID and settings.RAZORPAY_KEY_SECRET)


def get_client() -> razorpay.Client:
    if not is_configured():
        raise PaymentGatewayNotConfigured("Payment gateway not configured. Please contact support.")
    return razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))


def create_order(amount_minor: int, receipt: str, notes: dict) -> dict:
    """
    Create a Razorpay order.

    Args:
        amount_minor: Amount in paise
        receipt: Merchant receipt id (at most 40 characters)
        notes: Key/value metadata stored on the order

    Returns:
        dict: Order as returned by Razorpay (``id``, ``amount``, ``currency``, ...)
    """
    client = get_client()
    payload = {
        "amount": amount_minor,
        "currency": settings.PAYMENT_CURRENCY,
        "receipt": receipt,
        "notes": {key: value for key, value in notes.items() if value is not None},
    }
    try:
        order = client.order.create(data=payload)
    except (
        razorpay.errors.BadRequestError,
        razorpay.errors.ServerError,
        razorpay.errors.GatewayError,
    ) as exc:
        logger.error(f"Razorpay order create error for receipt {receipt}: {exc}", exc_info=True)
        raise PaymentGatewayError(str(exc) or "Payment gateway order creation failed") from exc
    except requests.RequestException as exc:
        logger.error(f"Razorpay unreachable for receipt {receipt}: {exc}", exc_info=True)
        raise PaymentGatewayError("Payment gateway order creation failed") from exc

    logger.info(f"Razorpay order {order.get('id')} created for receipt {receipt}")
    return order


def _hmac_hexdigest(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str) -> bool:
    """Checkout signature: HMAC-SHA256 of ``order_id|payment_id`` with the key secret."""
    if not signature:
        return False
    expected = _hmac_hexdigest(settings.RAZORPAY_KEY_SECRET, f"{order_id}|{payment_id}".encode("utf-8"))
    return hmac.compare_digest(expected, signature)


def verify_webhook_signature(body: bytes, signature: str | None) -> bool:
    """Webhook signature: HMAC-SHA256 of the raw body with the webhook secret."""
    secret = settings.RAZORPAY_WEBHOOK_SECRET
    if not secret or not signature:
        return False
    return hmac.compare_digest(_hmac_hexdigest(secret, body), signature)
