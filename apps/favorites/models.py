"""Model definition for favorites.

A ``Favorite`` bookmarks a venue for a user. Duplicate favorites are
prevented via a unique constraint.
"""

from __future__ import annotations

from django.db import models  # type: ignore


class Favorite(models.Model):
    """A user's favorite venue."""

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='favorites'
    )
    venue = models.ForeignKey(
        'venues.Venue', on_delete=models.CASCADE, related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['user', 'venue'], name='favorite_unique_user_venue'),
        ]
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"Favorite venue {self.venue_id} by user {self.user_id}"
