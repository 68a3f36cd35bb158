"""Read models behind the owner and customer notification badges.

The customer count is "accepted or declined in the last N days and not yet
acknowledged". Windows and ordering follow ``status_changed_at``, which
payment updates leave alone. A booking decided again after the
acknowledgement is unread once more.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from django.conf import settings  # type: ignore
from django.db.models import F, Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking


def owner_inquiries(owner):
    return (
        Booking.objects.select_related("venue")
        .filter(venue__owner=owner, status=Booking.Status.PENDING)
        .order_by("-created_at")
    )


def owner_inquiry_count(owner) -> dict[str, int]:
    pending = owner_inquiries(owner).count()
    return {"inquiry_count": pending, "pending_bookings": pending}


def _customer_updates(customer, *, days: int, now: datetime | None = None):
    since = (now or timezone.now()) - timedelta(days=days)
    return Booking.objects.filter(customer=customer, status_changed_at__gt=since)


def customer_unread_count(customer, *, now: datetime | None = None) -> int:
    updates = _customer_updates(
        customer, days=settings.CUSTOMER_NOTIFICATION_COUNT_DAYS, now=now
    ).filter(status__in=Booking.TERMINAL_STATUSES)
    return updates.exclude(
        Q(customer_acknowledged_at__isnull=False)
        & Q(customer_acknowledged_at__gte=F("status_changed_at"))
    ).count()


def customer_notifications(customer, *, now: datetime | None = None):
    """Inquiries made or decided in the last 30 days, pending ones included."""
    updates = _customer_updates(
        customer, days=settings.CUSTOMER_NOTIFICATION_FEED_DAYS, now=now
    )
    return updates.select_related("venue").order_by("-status_changed_at")[
        : settings.CUSTOMER_NOTIFICATIONS_LIMIT
    ]


def acknowledge_customer_notifications(customer, *, now: datetime | None = None) -> int:
    """Mark every decided booking of the customer as seen."""
    return Booking.objects.filter(
        customer=customer,
        status__in=Booking.TERMINAL_STATUSES,
    ).update(customer_acknowledged_at=now or timezone.now())


def snapshot_for(user) -> dict[str, int]:
    """Badge counts pushed over the notification stream."""
    if user.is_venue_owner():
        return owner_inquiry_count(user)
    return {"unread_count": customer_unread_count(user)}
