"""Admin registrations for the venue catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Venue, VenueImage


class VenueImageInline(admin.TabularInline):
    model = VenueImage
    extra = 0


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "location", "venue_type", "capacity", "price_per_day", "status", "total_bookings")
    list_filter = ("status", "venue_type")
    search_fields = ("name", "location", "owner__email")
    readonly_fields = ("price_per_day", "total_bookings", "created_at", "updated_at")
    inlines = [VenueImageInline]
