"""API views for favorites management."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.venues.models import Venue
from .models import Favorite
from .serializers import FavoriteVenueSerializer


class FavoriteViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Viewset to add, list and remove favorite venues.

    Endpoints:
    - GET /api/favorites/ - favorite venues (active only)
    - POST /api/favorites/{venue_id}/ - add to favorites
    - DELETE /api/favorites/{venue_id}/ - remove from favorites
    - GET /api/favorites/check/{venue_id}/ - is the venue a favorite
    - GET /api/favorites/ids/ - ids of favorite venues
    """

    serializer_class = FavoriteVenueSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        """Active venues the caller has bookmarked, most recent first."""
        user = self.request.user
        if not user.is_authenticated:
            return Venue.objects.none()
        return (
            Venue.objects.filter(favorited_by__user=user, status=Venue.Status.ACTIVE)
            .select_related('owner')
            .prefetch_related('images')
            .order_by('-favorited_by__created_at')
        )

    @action(detail=False, methods=['post', 'delete'], url_path=r'(?P<venue_id>[0-9]+)', url_name='venue')
    def venue(self, request, venue_id=None):  # type: ignore
        if request.method == 'DELETE':
            Favorite.objects.filter(user=request.user, venue_id=venue_id).delete()
            return Response({'message': 'Venue removed from favorites', 'is_favorite': False})

        venue = Venue.objects.filter(pk=venue_id, status=Venue.Status.ACTIVE).first()
        if venue is None:
            raise NotFound('Venue not found')
        _, created = Favorite.objects.get_or_create(user=request.user, venue=venue)
        return Response(
            {'message': 'Venue added to favorites', 'is_favorite': True},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(detail=False, methods=['get'], url_path=r'check/(?P<venue_id>[0-9]+)')
    def check(self, request, venue_id=None):  # type: ignore
        is_favorite = Favorite.objects.filter(user=request.user, venue_id=venue_id).exists()
        return Response({'is_favorite': is_favorite})

    @action(detail=False, methods=['get'])
    def ids(self, request):  # type: ignore
        venue_ids = Favorite.objects.filter(
            user=request.user, venue__status=Venue.Status.ACTIVE
        ).values_list('venue_id', flat=True)
        return Response(list(venue_ids))
