"""Tests for notification badge counts, feeds and email tasks."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core import mail
from django.utils import timezone

from apps.bookings import services as booking_services
from apps.bookings.models import Booking
from apps.notifications import feeds
from apps.notifications.tasks import send_inquiry_emails, send_otp_email, send_status_change_emails
from apps.payments import services as payment_services
from apps.users.models import User
from apps.venues.models import Venue


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email="owner@example.com",
        password="secret123",
        name="Owner",
        user_type=User.UserType.VENUE_OWNER,
        is_verified=True,
    )


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        email="customer@example.com", password="secret123", name="Asha", is_verified=True
    )


@pytest.fixture
def venue(owner):
    return Venue.objects.create(
        owner=owner,
        name="Lotus Garden",
        description="Lawn",
        location="Pune",
        capacity=300,
        price_min=Decimal("20000"),
        price_max=Decimal("20000"),
    )


def make_booking(venue, customer, booking_status, *, decided_at=None) -> Booking:
    booking = Booking.objects.create(
        venue=venue,
        customer=customer,
        customer_name=customer.name,
        customer_email=customer.email,
        event_date=date.today() + timedelta(days=20),
        guest_count=50,
        amount=Decimal("20000"),
        payment_amount=Decimal("23600"),
        status=booking_status,
    )
    if decided_at is not None:
        Booking.objects.filter(pk=booking.pk).update(status_changed_at=decided_at)
        booking.refresh_from_db()
    return booking


@pytest.mark.django_db
def test_unread_count_window_is_seven_days(venue, customer) -> None:
    now = timezone.now()
    make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=6, hours=23))
    make_booking(venue, customer, Booking.Status.CANCELLED, decided_at=now - timedelta(days=7))
    make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=8))
    make_booking(venue, customer, Booking.Status.PENDING, decided_at=now - timedelta(days=1))

    assert feeds.customer_unread_count(customer, now=now) == 1
    assert len(feeds.customer_notifications(customer, now=now)) == 4


@pytest.mark.django_db
def test_feed_drops_updates_older_than_thirty_days(venue, customer) -> None:
    now = timezone.now()
    recent = make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=29))
    make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=31))

    assert [b.id for b in feeds.customer_notifications(customer, now=now)] == [recent.id]


@pytest.mark.django_db
def test_feed_is_limited_and_newest_first(venue, customer) -> None:
    now = timezone.now()
    for hours in range(12):
        make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(hours=hours + 1))

    notifications = list(feeds.customer_notifications(customer, now=now))

    assert len(notifications) == 10
    assert notifications == sorted(notifications, key=lambda b: b.status_changed_at, reverse=True)


@pytest.mark.django_db
def test_acknowledge_keeps_decision_time(venue, customer) -> None:
    decided_at = timezone.now() - timedelta(days=2)
    booking = make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=decided_at)

    assert feeds.acknowledge_customer_notifications(customer) == 1

    booking.refresh_from_db()
    assert booking.status_changed_at == decided_at
    assert booking.customer_acknowledged_at is not None
    assert feeds.customer_unread_count(customer) == 0


@pytest.mark.django_db
def test_payment_after_acknowledge_stays_read(venue, customer) -> None:
    booking = booking_services.create_booking(
        customer=customer,
        venue=venue,
        event_date=date.today() + timedelta(days=20),
        guest_count=50,
        customer_name=customer.name,
        customer_email=customer.email,
    )
    booking_services.transition_status(booking, Booking.Status.CONFIRMED)
    feeds.acknowledge_customer_notifications(customer)
    assert feeds.customer_unread_count(customer) == 0

    payment_services.mark_completed(booking, "pay_1")

    assert feeds.customer_unread_count(customer) == 0


@pytest.mark.django_db
def test_payment_does_not_reorder_feed(venue, customer) -> None:
    now = timezone.now()
    older = make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=3))
    newer = make_booking(venue, customer, Booking.Status.CANCELLED, decided_at=now - timedelta(days=1))

    payment_services.mark_completed(older, "pay_2")

    assert [b.id for b in feeds.customer_notifications(customer)] == [newer.id, older.id]


@pytest.mark.django_db
def test_new_decision_after_acknowledge_is_unread(venue, customer) -> None:
    now = timezone.now()
    booking = make_booking(venue, customer, Booking.Status.CONFIRMED, decided_at=now - timedelta(days=1))
    feeds.acknowledge_customer_notifications(customer, now=now - timedelta(hours=1))

    booking_services.transition_status(booking, Booking.Status.CANCELLED)

    assert feeds.customer_unread_count(customer) == 1


@pytest.mark.django_db
def test_owner_counts_and_snapshot(venue, owner, customer) -> None:
    make_booking(venue, customer, Booking.Status.PENDING)
    make_booking(venue, customer, Booking.Status.PENDING)
    make_booking(venue, customer, Booking.Status.CONFIRMED)

    assert feeds.owner_inquiry_count(owner) == {"inquiry_count": 2, "pending_bookings": 2}
    assert feeds.snapshot_for(owner) == {"inquiry_count": 2, "pending_bookings": 2}
    assert feeds.snapshot_for(customer) == {"unread_count": 1}


@pytest.mark.django_db
def test_status_emails_go_to_admin_and_customer_snapshot(venue, customer, settings) -> None:
    settings.ADMIN_NOTIFICATION_EMAIL = "ops@venuekart.test"
    booking = make_booking(venue, customer, Booking.Status.CANCELLED)
    booking.customer_email = "asha.events@example.com"
    booking.save()

    result = send_status_change_emails(booking.id, Booking.Status.CANCELLED)

    assert result == {"admin": True, "customer": True}
    assert sorted(message.to[0] for message in mail.outbox) == [
        "asha.events@example.com",
        "ops@venuekart.test",
    ]


@pytest.mark.django_db
def test_inquiry_emails_for_missing_booking() -> None:
    assert send_inquiry_emails(999) == {"owner": False, "admin": False}
    assert mail.outbox == []


@pytest.mark.django_db
def test_otp_email_subject_per_purpose() -> None:
    assert send_otp_email("user@example.com", "123456", "password_reset") is True

    assert mail.outbox[0].subject == "VenueKart - Password Reset Verification"
    assert "123456" in mail.outbox[0].body
