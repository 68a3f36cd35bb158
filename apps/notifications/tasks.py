"""Celery tasks that deliver VenueKart emails outside the request cycle."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.bookings.models import Booking
from . import services

logger = logging.getLogger(__name__)


def enqueue(task, *args) -> bool:
    """Queue ``task`` without letting a broker outage fail the caller."""
    try:
        task.delay(*args)
        return True
    except Exception as exc:
        logger.warning(f"Could not queue {task.name}: {exc}", exc_info=True)
        return False


def _load_booking(booking_id: int) -> Booking | None:
    booking = (
        Booking.objects.select_related("venue", "venue__owner", "customer")
        .filter(pk=booking_id)
        .first()
    )
    if booking is None:
        logger.warning(f"Booking {booking_id} disappeared before its emails were sent")
    return booking


@shared_task(name="notifications.send_otp_email")
def send_otp_email(email: str, otp: str, purpose: str) -> bool:
    return services.send_otp_code_email(email, otp, purpose)


@shared_task(name="notifications.send_inquiry_emails")
def send_inquiry_emails(booking_id: int) -> dict[str, bool]:
    """Tell the venue owner and the admin inbox about a new inquiry."""
    booking = _load_booking(booking_id)
    if booking is None:
        return {"owner": False, "admin": False}
    return {
        "owner": services.send_inquiry_to_owner_email(booking),
        "admin": services.send_inquiry_to_admin_email(booking),
    }


@shared_task(name="notifications.send_status_change_emails")
def send_status_change_emails(booking_id: int, status: str) -> dict[str, bool]:
    """Tell the admin inbox and the customer about the owner's decision."""
    booking = _load_booking(booking_id)
    if booking is None:
        return {"admin": False, "customer": False}
    if status == Booking.Status.CONFIRMED:
        return {
            "admin": services.send_inquiry_accepted_to_admin_email(booking),
            "customer": services.send_inquiry_accepted_to_customer_email(booking),
        }
    return {
        "admin": services.send_inquiry_declined_to_admin_email(booking),
        "customer": services.send_inquiry_declined_to_customer_email(booking),
    }
