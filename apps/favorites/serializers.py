"""Serializers for the favorites domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.venues.serializers import VenueSerializer


class FavoriteVenueSerializer(VenueSerializer):
    """Venue card on the favorites page."""

    is_favorite = serializers.SerializerMethodField()

    class Meta(VenueSerializer.Meta):
        fields = VenueSerializer.Meta.fields + ['is_favorite']
        read_only_fields = fields

    def get_is_favorite(self, obj) -> bool:  # type: ignore
        return True
