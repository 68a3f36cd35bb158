"""URL declarations for the venues app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import VenueViewSet

router = SimpleRouter()
router.register(r'', VenueViewSet, basename='venue')

urlpatterns = [
    path('', include(router.urls)),
]
