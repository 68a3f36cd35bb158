"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "venue",
        "customer_name",
        "event_date",
        "guest_count",
        "status",
        "payment_status",
        "payment_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "event_date")
    search_fields = ("venue__name", "customer_name", "customer_email", "razorpay_order_id")
    raw_id_fields = ("venue", "customer")
    readonly_fields = (
        "payment_amount",
        "razorpay_order_id",
        "razorpay_payment_id",
        "payment_completed_at",
        "status_changed_at",
        "customer_acknowledged_at",
        "created_at",
        "updated_at",
    )
