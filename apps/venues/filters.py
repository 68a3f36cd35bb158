"""FilterSet definitions for the public venue listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Venue


class VenueFilterSet(django_filters.FilterSet):
    """Case-insensitive substring filters used by the venue search page."""

    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    type = django_filters.CharFilter(field_name="venue_type", lookup_expr="icontains")
    search = django_filters.CharFilter(method="filter_search")

    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    min_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")

    class Meta:
        model = Venue
        fields = ["location", "type"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
