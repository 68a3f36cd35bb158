"""Serializers for the booking domain."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from apps.venues.models import Venue
from .models import Booking
from .services import VenueUnavailableError, ensure_date_available, submit_inquiry


class BookingCreateSerializer(serializers.Serializer):
    """Inquiry payload submitted by a customer.

    Contact fields default to the caller's profile and are stored as given.
    """

    venue_id = serializers.IntegerField()
    event_date = serializers.DateField()
    event_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    guest_count = serializers.IntegerField(min_value=1)
    customer_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    customer_email = serializers.EmailField(required=False, allow_blank=True)
    customer_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    special_requirements = serializers.CharField(required=False, allow_blank=True, default="")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        venue = (
            Venue.objects.filter(pk=attrs["venue_id"], status=Venue.Status.ACTIVE)
            .select_related("owner")
            .first()
        )
        if venue is None:
            raise NotFound("Venue not found or inactive")
        if attrs["guest_count"] > venue.capacity:
            raise serializers.ValidationError(
                {"guest_count": f"Guest count exceeds venue capacity ({venue.capacity})"}
            )
        try:
            ensure_date_available(venue, attrs["event_date"])
        except VenueUnavailableError as exc:
            raise serializers.ValidationError({"event_date": str(exc)})

        user = self.context["request"].user
        attrs["venue"] = venue
        attrs["customer_name"] = attrs.get("customer_name") or user.name
        attrs["customer_email"] = attrs.get("customer_email") or user.email
        attrs["customer_phone"] = attrs.get("customer_phone") or user.mobile_number or ""
        return attrs

    def create(self, validated_data: dict[str, Any]) -> Booking:  # type: ignore
        validated = dict(validated_data)
        validated.pop("venue_id")
        try:
            return submit_inquiry(customer=self.context["request"].user, **validated)
        except VenueUnavailableError as exc:
            raise serializers.ValidationError({"event_date": str(exc)})


class BookingSerializer(serializers.ModelSerializer):
    """Booking as both parties see it, with venue and owner details joined in."""

    venue_id = serializers.ReadOnlyField(source="venue.id")
    venue_name = serializers.ReadOnlyField(source="venue.name")
    venue_location = serializers.ReadOnlyField(source="venue.location")
    owner_name = serializers.ReadOnlyField(source="venue.owner.name")
    owner_phone = serializers.ReadOnlyField(source="venue.owner.mobile_number")
    customer_id = serializers.ReadOnlyField(source="customer.id")

    class Meta:
        model = Booking
        fields = [
            "id",
            "venue_id",
            "venue_name",
            "venue_location",
            "owner_name",
            "owner_phone",
            "customer_id",
            "customer_name",
            "customer_email",
            "customer_phone",
            "event_date",
            "event_type",
            "guest_count",
            "amount",
            "payment_amount",
            "special_requirements",
            "status",
            "payment_status",
            "razorpay_order_id",
            "payment_completed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Booking.Status.CONFIRMED, Booking.Status.CANCELLED],
        error_messages={"invalid_choice": "Invalid status. Must be confirmed or cancelled."},
    )


class CustomerNotificationSerializer(serializers.ModelSerializer):
    """A status update shown in the customer's notification dropdown."""

    venue_name = serializers.ReadOnlyField(source="venue.name")
    message = serializers.SerializerMethodField()

    MESSAGES = {
        Booking.Status.CONFIRMED: "Your inquiry for {venue} has been accepted!",
        Booking.Status.CANCELLED: "Your inquiry for {venue} has been declined.",
        Booking.Status.PENDING: "Your inquiry for {venue} is pending review.",
    }

    class Meta:
        model = Booking
        fields = [
            "id",
            "venue_name",
            "event_date",
            "status",
            "payment_status",
            "message",
            "status_changed_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_message(self, obj: Booking) -> str:
        return self.MESSAGES[obj.status].format(venue=obj.venue.name)
