"""Notification services for sending VenueKart emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)

OTP_SUBJECTS = {
    "registration": "VenueKart - Account Verification",
    "password_reset": "VenueKart - Password Reset Verification",
    "email_update": "VenueKart - Email Address Verification",
}


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send one email, rendering the HTML body from a template when given.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        template_name: Django template path (optional)
        context: Template context
        html_message: Prebuilt HTML body (optional)

    Returns:
        bool: True if the message was handed to the mail backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _booking_context(booking: "Booking") -> dict:
    venue = booking.venue
    return {
        "booking": booking,
        "venue": venue,
        "owner": venue.owner,
        "event_date": booking.event_date.strftime("%d %b %Y"),
        "dashboard_url": settings.FRONTEND_URL,
    }


def send_otp_code_email(email: str, otp: str, purpose: str) -> bool:
    """One-time code for registration, password reset or an email change."""
    return send_email_notification(
        recipient_email=email,
        subject=OTP_SUBJECTS.get(purpose, OTP_SUBJECTS["registration"]),
        template_name="notifications/email/otp.html",
        context={
            "otp": otp,
            "purpose": purpose,
            "ttl_minutes": settings.OTP_TTL_MINUTES,
        },
    )


def send_inquiry_to_owner_email(booking: "Booking") -> bool:
    """New inquiry for the venue owner. Customer contact details are left out."""
    return send_email_notification(
        recipient_email=booking.venue.owner.email,
        subject=f"New Booking Inquiry - {booking.venue.name}",
        template_name="notifications/email/inquiry_owner.html",
        context=_booking_context(booking),
    )


def send_inquiry_to_admin_email(booking: "Booking") -> bool:
    """Full inquiry, customer contact included, for the internal inbox."""
    return send_email_notification(
        recipient_email=settings.ADMIN_NOTIFICATION_EMAIL,
        subject=f"[ADMIN] New Venue Inquiry - {booking.venue.name}",
        template_name="notifications/email/inquiry_admin.html",
        context=_booking_context(booking),
    )


def send_inquiry_accepted_to_admin_email(booking: "Booking") -> bool:
    return send_email_notification(
        recipient_email=settings.ADMIN_NOTIFICATION_EMAIL,
        subject=f"[ADMIN] Venue Inquiry Accepted - {booking.venue.name}",
        template_name="notifications/email/decision_admin.html",
        context={**_booking_context(booking), "accepted": True},
    )


def send_inquiry_accepted_to_customer_email(booking: "Booking") -> bool:
    return send_email_notification(
        recipient_email=booking.customer_email,
        subject=f"Venue Inquiry Accepted - {booking.venue.name}",
        template_name="notifications/email/decision_customer.html",
        context={**_booking_context(booking), "accepted": True},
    )


def send_inquiry_declined_to_admin_email(booking: "Booking") -> bool:
    return send_email_notification(
        recipient_email=settings.ADMIN_NOTIFICATION_EMAIL,
        subject=f"[ADMIN] Venue Inquiry Declined - {booking.venue.name}",
        template_name="notifications/email/decision_admin.html",
        context={**_booking_context(booking), "accepted": False},
    )


def send_inquiry_declined_to_customer_email(booking: "Booking") -> bool:
    return send_email_notification(
        recipient_email=booking.customer_email,
        subject=f"Venue Inquiry Update - {booking.venue.name}",
        template_name="notifications/email/decision_customer.html",
        context={**_booking_context(booking), "accepted": False},
    )
