"""Integration tests for venue catalog endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User
from apps.venues.models import Venue


def make_owner(email: str = "owner@example.com") -> User:
    return User.objects.create_user(
        email=email,
        password="secret123",
        name="Venue Owner",
        mobile_number="9000000001",
        user_type=User.UserType.VENUE_OWNER,
        is_verified=True,
    )


def make_venue(owner: User, **overrides) -> Venue:
    fields = {
        "name": "Grand Palace",
        "description": "Banquet hall with lawn",
        "venue_type": "Banquet Hall",
        "location": "Mumbai, Maharashtra",
        "capacity": 100,
        "price_min": Decimal("40000"),
        "price_max": Decimal("60000"),
    }
    fields.update(overrides)
    return Venue.objects.create(owner=owner, **fields)


class VenueOwnerAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = make_owner()
        self.client.force_authenticate(self.owner)
        self.list_url = reverse("venue-list")

    def _payload(self, **overrides):
        payload = {
            "name": "Grand Palace",
            "description": "Banquet hall with lawn",
            "venue_type": "Banquet Hall",
            "location": "Mumbai, Maharashtra",
            "capacity": 100,
            "price_min": "40000",
            "price_max": "60000",
            "images": ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"],
            "facilities": ["Parking", "  ", "Catering "],
        }
        payload.update(overrides)
        return payload

    def test_create_venue_averages_price_range(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        venue = Venue.objects.get(pk=response.data["venue_id"])
        self.assertEqual(venue.price_per_day, Decimal("50000"))
        self.assertEqual(venue.owner, self.owner)
        self.assertEqual(venue.facilities, ["Parking", "Catering"])
        self.assertEqual(venue.image_urls, ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"])
        self.assertTrue(venue.images.get(image_url="https://cdn.example.com/a.jpg").is_primary)

    def test_single_price_sets_both_bounds(self) -> None:
        payload = self._payload(price="75000")
        payload.pop("price_min")
        payload.pop("price_max")

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        venue = Venue.objects.get(pk=response.data["venue_id"])
        self.assertEqual((venue.price_min, venue.price_max, venue.price_per_day), (75000, 75000, 75000))

    def test_inverted_price_range_is_rejected(self) -> None:
        response = self.client.post(self.list_url, self._payload(price_min="70000"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("price_max", response.data["details"])

    def test_zero_capacity_is_rejected(self) -> None:
        response = self.client.post(self.list_url, self._payload(capacity=0), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_blank_type_defaults_to_venue(self) -> None:
        response = self.client.post(self.list_url, self._payload(venue_type=" "), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Venue.objects.get(pk=response.data["venue_id"]).venue_type, "Venue")

    def test_customer_cannot_create_venue(self) -> None:
        customer = User.objects.create_user(email="c@example.com", password="secret123", name="C", is_verified=True)
        self.client.force_authenticate(customer)
        response = self.client.post(self.list_url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_update_without_price_keeps_range_and_replaces_images(self) -> None:
        venue = make_venue(self.owner)
        venue.replace_images(["https://cdn.example.com/old.jpg"])

        response = self.client.put(
            reverse("venue-detail", args=[venue.id]),
            {
                "name": "Grand Palace Deluxe",
                "description": "Renovated",
                "location": "Mumbai",
                "capacity": 120,
                "images": ["https://cdn.example.com/new.jpg"],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        venue.refresh_from_db()
        self.assertEqual(venue.name, "Grand Palace Deluxe")
        self.assertEqual(venue.price_per_day, Decimal("50000"))
        self.assertEqual(venue.image_urls, ["https://cdn.example.com/new.jpg"])

    def test_other_owner_gets_not_found(self) -> None:
        venue = make_venue(make_owner("other@example.com"))

        update = self.client.patch(reverse("venue-detail", args=[venue.id]), {"name": "Mine"}, format="json")
        delete = self.client.delete(reverse("venue-detail", args=[venue.id]))

        self.assertEqual(update.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(update.data["error"], "Venue not found or access denied.")
        self.assertEqual(delete.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Venue.objects.filter(pk=venue.pk).exists())

    def test_delete_own_venue(self) -> None:
        venue = make_venue(self.owner)
        response = self.client.delete(reverse("venue-detail", args=[venue.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Venue.objects.filter(pk=venue.pk).exists())

    def test_my_venues_and_dashboard_stats(self) -> None:
        venue = make_venue(self.owner)
        make_venue(self.owner, name="Closed Hall", status=Venue.Status.INACTIVE)
        customer = User.objects.create_user(email="c@example.com", password="secret123", name="C", is_verified=True)
        for booking_status in (Booking.Status.CONFIRMED, Booking.Status.PENDING):
            Booking.objects.create(
                venue=venue,
                customer=customer,
                customer_name="C",
                customer_email="c@example.com",
                event_date=date.today() + timedelta(days=10),
                guest_count=50,
                amount=Decimal("50000"),
                status=booking_status,
            )

        my_venues = self.client.get(reverse("venue-my-venues"))
        stats = self.client.get(reverse("venue-dashboard-stats"))

        self.assertEqual(my_venues.status_code, status.HTTP_200_OK, my_venues.data)
        self.assertEqual(len(my_venues.data), 2)
        row = next(item for item in my_venues.data if item["id"] == venue.id)
        self.assertEqual(row["booking_count"], 2)
        self.assertEqual(Decimal(row["total_revenue"]), Decimal("50000"))

        self.assertEqual(stats.status_code, status.HTTP_200_OK, stats.data)
        self.assertEqual(stats.data["total_venues"], 2)
        self.assertEqual(stats.data["active_venues"], 1)
        self.assertEqual(stats.data["total_bookings"], 2)
        self.assertEqual(stats.data["pending_bookings"], 1)
        self.assertEqual(Decimal(stats.data["total_revenue"]), Decimal("50000"))


class VenueCatalogAPITests(APITestCase):
    def setUp(self) -> None:
        owner = make_owner()
        self.palace = make_venue(owner)
        self.garden = make_venue(
            owner,
            name="Lotus Garden",
            description="Open-air lawn",
            venue_type="Garden",
            location="Pune",
            capacity=400,
            price_min=Decimal("20000"),
            price_max=Decimal("30000"),
        )
        self.hidden = make_venue(owner, name="Hidden Hall", status=Venue.Status.INACTIVE)

    def test_list_shows_only_active_venues_with_pagination(self) -> None:
        response = self.client.get(reverse("venue-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        names = {venue["name"] for venue in response.data["venues"]}
        self.assertEqual(names, {"Grand Palace", "Lotus Garden"})
        self.assertEqual(response.data["pagination"]["total_count"], 2)
        self.assertFalse(response.data["pagination"]["has_next_page"])

    def test_limit_controls_page_size(self) -> None:
        response = self.client.get(reverse("venue-list"), {"limit": 1, "page": 2})
        self.assertEqual(len(response.data["venues"]), 1)
        self.assertEqual(response.data["pagination"]["current_page"], 2)
        self.assertTrue(response.data["pagination"]["has_prev_page"])

    def test_filters_are_case_insensitive_substrings(self) -> None:
        by_location = self.client.get(reverse("venue-list"), {"location": "mumbai"})
        by_type = self.client.get(reverse("venue-list"), {"type": "garden"})
        by_search = self.client.get(reverse("venue-list"), {"search": "LAWN"})

        self.assertEqual([v["name"] for v in by_location.data["venues"]], ["Grand Palace"])
        self.assertEqual([v["name"] for v in by_type.data["venues"]], ["Lotus Garden"])
        self.assertEqual(len(by_search.data["venues"]), 2)

    def test_detail_hides_inactive_venue(self) -> None:
        visible = self.client.get(reverse("venue-detail", args=[self.palace.id]))
        hidden = self.client.get(reverse("venue-detail", args=[self.hidden.id]))

        self.assertEqual(visible.status_code, status.HTTP_200_OK)
        self.assertEqual(visible.data["owner_email"], "owner@example.com")
        self.assertEqual(hidden.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_options_cover_active_venues(self) -> None:
        response = self.client.get(reverse("venue-filter-options"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["venue_types"], ["Banquet Hall", "Garden"])
        self.assertEqual(response.data["locations"], ["Mumbai, Maharashtra", "Pune"])
        self.assertEqual(response.data["price_range"], {"min": Decimal("20000"), "max": Decimal("60000")})
        self.assertEqual(response.data["capacity_range"], {"min": 100, "max": 400})

    def test_filter_options_fall_back_when_catalog_is_empty(self) -> None:
        Venue.objects.all().delete()
        response = self.client.get(reverse("venue-filter-options"))
        self.assertEqual(response.data["price_range"], {"min": 0, "max": 500000})
        self.assertEqual(response.data["capacity_range"], {"min": 0, "max": 5000})
