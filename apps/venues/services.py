"""Read-side queries for the venue catalog."""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Count, DecimalField, Max, Min, Q, Sum, Value  # type: ignore
from django.db.models.functions import Coalesce  # type: ignore

from apps.bookings.models import Booking
from .models import Venue

DEFAULT_PRICE_RANGE = {"min": 0, "max": 500000}
DEFAULT_CAPACITY_RANGE = {"min": 0, "max": 5000}

_ZERO = Value(Decimal("0.00"), output_field=DecimalField(max_digits=14, decimal_places=2))


def _confirmed_revenue(prefix: str = "bookings__"):
    return Coalesce(
        Sum(f"{prefix}amount", filter=Q(**{f"{prefix}status": Booking.Status.CONFIRMED})),
        _ZERO,
    )


def filter_options() -> dict:
    """Distinct types and locations plus price and capacity bounds over active venues."""
    active = Venue.objects.filter(status=Venue.Status.ACTIVE)

    venue_types = sorted(
        {value.strip() for value in active.values_list("venue_type", flat=True) if value and value.strip()}
    )
    locations = sorted(
        {value.strip() for value in active.values_list("location", flat=True) if value and value.strip()}
    )
    bounds = active.aggregate(
        min_price=Min("price_min"),
        max_price=Max("price_max"),
        min_capacity=Min("capacity"),
        max_capacity=Max("capacity"),
    )

    return {
        "venue_types": venue_types,
        "locations": locations,
        "price_range": {
            "min": bounds["min_price"] or DEFAULT_PRICE_RANGE["min"],
            "max": bounds["max_price"] or DEFAULT_PRICE_RANGE["max"],
        },
        "capacity_range": {
            "min": bounds["min_capacity"] or DEFAULT_CAPACITY_RANGE["min"],
            "max": bounds["max_capacity"] or DEFAULT_CAPACITY_RANGE["max"],
        },
    }


def owner_venues(owner):
    """The owner's venues, any status, with booking count and confirmed revenue."""
    return (
        Venue.objects.filter(owner=owner)
        .select_related("owner")
        .prefetch_related("images")
        .annotate(
            booking_count=Count("bookings", distinct=True),
            total_revenue=_confirmed_revenue(),
        )
        .order_by("-created_at")
    )


def owner_dashboard_stats(owner) -> dict:
    venues = Venue.objects.filter(owner=owner)
    bookings = Booking.objects.filter(venue__owner=owner)
    booking_stats = bookings.aggregate(
        total_bookings=Count("id"),
        pending_bookings=Count("id", filter=Q(status=Booking.Status.PENDING)),
        total_revenue=_confirmed_revenue(prefix=""),
    )
    return {
        "total_venues": venues.count(),
        "active_venues": venues.filter(status=Venue.Status.ACTIVE).count(),
        "total_bookings": booking_stats["total_bookings"],
        "pending_bookings": booking_stats["pending_bookings"],
        "total_revenue": booking_stats["total_revenue"],
    }
