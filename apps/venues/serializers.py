"""Serializers for the venue catalog."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Venue


class VenueSerializer(serializers.ModelSerializer):
    """Public representation of a venue."""

    owner_id = serializers.ReadOnlyField(source="owner.id")
    owner_name = serializers.ReadOnlyField(source="owner.name")
    owner_phone = serializers.ReadOnlyField(source="owner.mobile_number")
    owner_email = serializers.ReadOnlyField(source="owner.email")
    images = serializers.ListField(source="image_urls", child=serializers.URLField(), read_only=True)

    class Meta:
        model = Venue
        fields = [
            "id",
            "name",
            "description",
            "venue_type",
            "location",
            "capacity",
            "price_per_day",
            "price_min",
            "price_max",
            "status",
            "images",
            "facilities",
            "total_bookings",
            "owner_id",
            "owner_name",
            "owner_phone",
            "owner_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OwnerVenueSerializer(VenueSerializer):
    """Owner dashboard row, with booking totals annotated by the query."""

    booking_count = serializers.IntegerField(read_only=True)
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta(VenueSerializer.Meta):
        fields = VenueSerializer.Meta.fields + ["booking_count", "total_revenue"]
        read_only_fields = fields


class VenueWriteSerializer(serializers.ModelSerializer):
    """Create and update payload.

    The price may be given as a single ``price`` or as a
    ``price_min``/``price_max`` range. An update that omits all three keeps
    the stored range. ``images`` and ``facilities`` replace the stored lists.
    """

    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, write_only=True)
    price_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    price_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    venue_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    facilities = serializers.ListField(child=serializers.CharField(max_length=100, allow_blank=True), required=False)

    class Meta:
        model = Venue
        fields = [
            "name",
            "description",
            "venue_type",
            "location",
            "capacity",
            "price",
            "price_min",
            "price_max",
            "images",
            "facilities",
            "status",
        ]
        extra_kwargs = {
            "status": {"required": False},
        }

    def validate_capacity(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Footfall capacity must be greater than 0.")
        return value

    def validate_facilities(self, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        price = attrs.pop("price", None)
        if price is not None:
            attrs["price_min"] = price
            attrs["price_max"] = price

        price_min = attrs.get("price_min")
        price_max = attrs.get("price_max")
        if (price_min is None) != (price_max is None):
            raise serializers.ValidationError("Provide both price_min and price_max, or a single price.")
        if price_min is None and self.instance is None:
            raise serializers.ValidationError({"price": "Price (or price_min/price_max) is required."})

        if price_min is not None:
            if price_min <= Decimal("0") or price_max <= Decimal("0"):
                raise serializers.ValidationError({"price": "Price must be greater than 0."})
            if price_min > price_max:
                raise serializers.ValidationError(
                    {"price_max": "Maximum price must be greater than or equal to minimum price."}
                )

        if "venue_type" in attrs and not attrs["venue_type"].strip():
            attrs["venue_type"] = settings.DEFAULT_VENUE_TYPE
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        images = validated_data.pop("images", [])
        validated_data.setdefault("venue_type", settings.DEFAULT_VENUE_TYPE)
        venue = Venue.objects.create(owner=self.context["request"].user, **validated_data)
        if images:
            venue.replace_images(images)
        return venue

    @transaction.atomic
    def update(self, instance: Venue, validated_data: dict[str, Any]):  # type: ignore
        images = validated_data.pop("images", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if images is not None:
            instance.replace_images(images)
        return instance
