"""Venue catalog API views."""

from __future__ import annotations

from django.http import Http404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsVenueOwner
from .filters import VenueFilterSet
from .models import Venue
from .pagination import VenuePagination
from .serializers import OwnerVenueSerializer, VenueSerializer, VenueWriteSerializer
from . import services

PUBLIC_ACTIONS = {"list", "retrieve", "filter_options"}
OWNER_WRITE_ACTIONS = {"update", "partial_update", "destroy"}
OWNER_ONLY_ACTIONS = {"create", "my_venues", "dashboard_stats"}


class VenueViewSet(viewsets.ModelViewSet):
    """Public catalog reads plus owner-scoped venue management.

    Writes on a venue that does not belong to the caller answer 404, the
    same as a venue that does not exist.
    """

    queryset = Venue.objects.select_related("owner").prefetch_related("images")
    serializer_class = VenueSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = VenueFilterSet
    pagination_class = VenuePagination
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        if self.action in OWNER_ONLY_ACTIONS:
            return [permissions.IsAuthenticated(), IsVenueOwner()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action in OWNER_WRITE_ACTIONS:
            return qs.filter(owner=self.request.user)
        return qs.filter(status=Venue.Status.ACTIVE)

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return VenueWriteSerializer
        return VenueSerializer

    def get_object(self):  # type: ignore
        try:
            return super().get_object()
        except Http404:
            raise NotFound("Venue not found or access denied.")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        venue = serializer.save()
        return Response(
            {
                "message": "Venue created successfully",
                "venue_id": venue.id,
                "venue": VenueSerializer(venue, context=self.get_serializer_context()).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        venue = self.get_object()
        serializer = self.get_serializer(venue, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        venue = serializer.save()
        return Response(
            {
                "message": "Venue updated successfully",
                "venue": VenueSerializer(venue, context=self.get_serializer_context()).data,
            }
        )

    def destroy(self, request, *args, **kwargs):  # type: ignore
        venue = self.get_object()
        venue.delete()
        return Response({"message": "Venue deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="filter-options")
    def filter_options(self, request):  # type: ignore
        return Response(services.filter_options())

    @action(detail=False, methods=["get"], url_path="owner/my-venues")
    def my_venues(self, request):  # type: ignore
        serializer = OwnerVenueSerializer(services.owner_venues(request.user), many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"], url_path="owner/dashboard-stats")
    def dashboard_stats(self, request):  # type: ignore
        return Response(services.owner_dashboard_stats(request.user))
