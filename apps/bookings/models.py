"""Booking domain models for VenueKart."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import Money


class Booking(models.Model):
    """An inquiry for a venue on an event date, and the booking it becomes.

    Customer name, email and phone are copied from the request when the
    inquiry is made and are never refreshed from the user's profile: the
    record shows who asked, as they asked it.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        NOT_REQUIRED = "not_required", _("Not required")
        PENDING = "pending", _("Pending")
        COMPLETED = "completed", _("Completed")
        FAILED = "failed", _("Failed")

    TERMINAL_STATUSES = (Status.CONFIRMED, Status.CANCELLED)

    venue = models.ForeignKey(
        "venues.Venue",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20, blank=True)
    event_date = models.DateField()
    event_type = models.CharField(max_length=100, blank=True)
    guest_count = models.PositiveIntegerField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Displayed price of the venue at inquiry time."),
    )
    payment_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Amount charged: base price plus GST, rounded to whole rupees."),
    )
    special_requirements = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.NOT_REQUIRED,
    )
    razorpay_order_id = models.CharField(max_length=64, blank=True)
    razorpay_payment_id = models.CharField(max_length=64, blank=True)
    payment_completed_at = models.DateTimeField(null=True, blank=True)
    payment_error_description = models.TextField(blank=True)
    status_changed_at = models.DateTimeField(
        default=timezone.now,
        help_text=_("When the inquiry was made or last accepted or declined."),
    )
    customer_acknowledged_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("When the customer last marked their status updates as seen."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["venue", "event_date", "status"], name="booking_venue_date_status_idx"),
            models.Index(fields=["customer", "status_changed_at"], name="booking_customer_status_idx"),
            models.Index(fields=["razorpay_order_id"], name="booking_razorpay_order_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for venue {self.venue_id} on {self.event_date}"

    @staticmethod
    def gross_amount(base_price) -> Decimal:
        """``round(base_price * (1 + GST))`` in whole rupees."""
        return Money(Decimal(str(base_price))).with_tax(settings.GST_RATE).amount

    @property
    def chargeable_amount(self) -> Decimal:
        return self.payment_amount if self.payment_amount is not None else self.amount

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES
