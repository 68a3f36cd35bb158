"""Role-based permission classes shared by the domain apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsVenueOwner(permissions.BasePermission):
    """Only venue-owner accounts may use the endpoint."""

    message = "Only venue owners can perform this action."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return hasattr(user, "is_venue_owner") and user.is_venue_owner()
