"""API views for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.notifications import feeds
from apps.users.permissions import IsVenueOwner
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    CustomerNotificationSerializer,
)
from . import services

OWNER_ACTIONS = {
    "owner_list",
    "owner_recent",
    "owner_inquiry_count",
    "owner_inquiries",
}


class BookingViewSet(mixins.CreateModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Inquiries from customers and the owner's accept/decline decisions.

    A booking that is not the caller's (as customer or as venue owner)
    answers 404, the same as one that does not exist. Status changes are
    looked up among the caller's venues only, so a customer gets 404 too.
    """

    queryset = Booking.objects.select_related("venue", "venue__owner", "customer")
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in OWNER_ACTIONS:
            return [permissions.IsAuthenticated(), IsVenueOwner()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "inquiry"}:
            return BookingCreateSerializer
        if self.action == "set_status":
            return BookingStatusSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if not user.is_authenticated:
            return qs.none()
        if self.action == "set_status":
            return qs.filter(venue__owner=user)
        if user.is_venue_owner():
            return qs.filter(venue__owner=user)
        return qs.filter(customer=user)

    def get_object(self):  # type: ignore
        queryset = self.get_queryset()
        booking = queryset.filter(pk=self.kwargs["pk"]).first()
        if booking is None:
            raise NotFound("Booking not found or access denied.")
        return booking

    def _read(self, booking_or_qs, *, many: bool = False):
        return BookingSerializer(booking_or_qs, many=many, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(self._read(booking), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def inquiry(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(
            {
                "message": "Inquiry submitted successfully",
                "inquiry_id": booking.id,
                "booking": self._read(booking),
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["put"], url_path="status", url_name="status")
    def set_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking: Booking = self.get_object()
        _, email_sent = services.transition_status(booking, serializer.validated_data["status"])
        return Response(
            {
                "message": f"Booking {booking.status} successfully",
                "email_sent": email_sent,
                "booking": self._read(booking),
            }
        )

    @action(detail=False, methods=["get"], url_path="owner", url_name="owner")
    def owner_list(self, request):  # type: ignore
        bookings = services.owner_bookings(request.user, status=request.query_params.get("status"))
        return Response(self._read(bookings, many=True))

    @action(detail=False, methods=["get"], url_path="owner/recent", url_name="owner-recent")
    def owner_recent(self, request):  # type: ignore
        try:
            limit = int(request.query_params.get("limit", settings.OWNER_RECENT_BOOKINGS_LIMIT))
        except ValueError:
            limit = settings.OWNER_RECENT_BOOKINGS_LIMIT
        bookings = services.owner_bookings(request.user)[: max(limit, 1)]
        return Response(self._read(bookings, many=True))

    @action(detail=False, methods=["get"], url_path="owner/inquiry-count", url_name="owner-inquiry-count")
    def owner_inquiry_count(self, request):  # type: ignore
        return Response(feeds.owner_inquiry_count(request.user))

    @action(detail=False, methods=["get"], url_path="owner/inquiries", url_name="owner-inquiries")
    def owner_inquiries(self, request):  # type: ignore
        inquiries = feeds.owner_inquiries(request.user)[: settings.OWNER_INQUIRIES_LIMIT]
        return Response(self._read(inquiries, many=True))

    @action(detail=False, methods=["get"], url_path="customer", url_name="customer")
    def customer_list(self, request):  # type: ignore
        return Response(self._read(services.customer_bookings(request.user), many=True))

    @action(
        detail=False,
        methods=["get"],
        url_path="customer/notification-count",
        url_name="customer-notification-count",
    )
    def customer_notification_count(self, request):  # type: ignore
        return Response({"unread_count": feeds.customer_unread_count(request.user)})

    @action(
        detail=False,
        methods=["get"],
        url_path="customer/notifications",
        url_name="customer-notifications",
    )
    def customer_notifications(self, request):  # type: ignore
        notifications = feeds.customer_notifications(request.user)
        return Response(CustomerNotificationSerializer(notifications, many=True).data)

    @action(
        detail=False,
        methods=["post"],
        url_path="customer/notifications/acknowledge",
        url_name="customer-notifications-acknowledge",
    )
    def acknowledge_notifications(self, request):  # type: ignore
        updated = feeds.acknowledge_customer_notifications(request.user)
        return Response({"message": "Notifications marked as seen", "acknowledged": updated})
