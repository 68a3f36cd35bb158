"""Domain services for the booking lifecycle."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.utils import timezone  # type: ignore

from apps.notifications.tasks import enqueue, send_inquiry_emails, send_status_change_emails
from apps.venues.models import Venue
from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


class VenueUnavailableError(Exception):
    """Raised when the venue already has a confirmed booking on the date."""


def ensure_date_available(venue: Venue, event_date: date, *, exclude_booking_id=None) -> None:
    """Reject the date when another booking for it is already confirmed.

    This is a plain read before the write; two inquiries confirmed at the
    same moment can both pass it.
    """
    confirmed = Booking.objects.filter(
        venue=venue,
        event_date=event_date,
        status=Booking.Status.CONFIRMED,
    )
    if exclude_booking_id is not None:
        confirmed = confirmed.exclude(pk=exclude_booking_id)
    if confirmed.exists():
        raise VenueUnavailableError("Venue is not available on this date")


@transaction.atomic
def create_booking(
    *,
    customer: "CustomUser",
    venue: Venue,
    event_date: date,
    guest_count: int,
    customer_name: str,
    customer_email: str,
    customer_phone: str = "",
    event_type: str = "",
    special_requirements: str = "",
    amount=None,
) -> Booking:
    """Create a pending booking with the GST-inclusive charge fixed up front."""
    ensure_date_available(venue, event_date)
    base_price = venue.base_price
    booking = Booking.objects.create(
        venue=venue,
        customer=customer,
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        event_date=event_date,
        event_type=event_type,
        guest_count=guest_count,
        amount=amount if amount is not None else base_price,
        payment_amount=Booking.gross_amount(base_price),
        special_requirements=special_requirements,
        status=Booking.Status.PENDING,
        payment_status=Booking.PaymentStatus.NOT_REQUIRED,
    )
    logger.info(
        f"Booking {booking.id} created for venue {venue.id} on {event_date} "
        f"by customer {customer.id}"
    )
    return booking


def submit_inquiry(**kwargs) -> Booking:
    """Create the booking and notify the venue owner and the admin inbox.

    The emails are queued after the booking is stored; a failure to send
    them never undoes the booking.
    """
    booking = create_booking(**kwargs)
    enqueue(send_inquiry_emails, booking.id)
    return booking


def transition_status(booking: Booking, new_status: str) -> tuple[str, bool]:
    """Move a booking to ``confirmed`` or ``cancelled`` on the owner's decision.

    Returns the previous status and whether notification emails were queued.
    A terminal booking may be moved again; only the first decision (from
    ``pending``) sends emails.
    Confirming an unpaid booking fixes the charge at the venue's current
    price plus GST.
    """
    previous_status = booking.status
    booking.status = new_status
    booking.status_changed_at = timezone.now()
    update_fields = ["status", "status_changed_at", "payment_status", "updated_at"]

    if booking.payment_status != Booking.PaymentStatus.COMPLETED:
        if new_status == Booking.Status.CONFIRMED:
            booking.payment_status = Booking.PaymentStatus.PENDING
            booking.payment_amount = Booking.gross_amount(booking.venue.base_price)
            update_fields.append("payment_amount")
        else:
            booking.payment_status = Booking.PaymentStatus.NOT_REQUIRED

    booking.save(update_fields=update_fields)

    if new_status == Booking.Status.CONFIRMED:
        Venue.objects.filter(pk=booking.venue_id).update(total_bookings=F("total_bookings") + 1)

    notify = previous_status == Booking.Status.PENDING and new_status in Booking.TERMINAL_STATUSES
    if notify:
        enqueue(send_status_change_emails, booking.id, new_status)

    logger.info(f"Booking {booking.id} moved from {previous_status} to {new_status}")
    return previous_status, notify


def owner_bookings(owner, *, status: str | None = None):
    qs = Booking.objects.select_related("venue").filter(venue__owner=owner)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at")


def customer_bookings(customer):
    return (
        Booking.objects.select_related("venue", "venue__owner")
        .filter(customer=customer)
        .order_by("-created_at")
    )
