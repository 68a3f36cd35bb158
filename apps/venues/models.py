"""Venue catalog models for VenueKart."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models, transaction  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Venue(models.Model):
    """A bookable venue listed by a venue owner."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="venues",
    )
    name = models.CharField(max_length=255)
    description = models.TextField()
    venue_type = models.CharField(max_length=100, default="Venue")
    location = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField(help_text=_("Maximum footfall."))
    price_min = models.DecimalField(max_digits=12, decimal_places=2)
    price_max = models.DecimalField(max_digits=12, decimal_places=2)
    price_per_day = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Displayed price, the average of price_min and price_max."),
    )
    facilities = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    total_bookings = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Venue")
        verbose_name_plural = _("Venues")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_min__lte=models.F("price_max")),
                name="venue_price_range_ordered",
            ),
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0),
                name="venue_capacity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "location"], name="venue_status_location_idx"),
            models.Index(fields=["owner", "status"], name="venue_owner_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.location})"

    def save(self, *args, **kwargs):  # type: ignore
        self.price_per_day = (Decimal(self.price_min) + Decimal(self.price_max)) / 2
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and {"price_min", "price_max"} & set(update_fields):
            kwargs["update_fields"] = list(set(update_fields) | {"price_per_day"})
        super().save(*args, **kwargs)

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def base_price(self) -> Decimal:
        """Price the GST charge is computed from."""
        return self.price_per_day or self.price_min or Decimal(settings.DEFAULT_VENUE_PRICE)

    @property
    def image_urls(self) -> list[str]:
        return [image.image_url for image in self.images.all()]

    @transaction.atomic
    def replace_images(self, urls: list[str]) -> None:
        """Swap the gallery wholesale; the first URL becomes the primary image."""
        self.images.all().delete()
        VenueImage.objects.bulk_create(
            [
                VenueImage(venue=self, image_url=url, is_primary=index == 0, position=index)
                for index, url in enumerate(urls)
            ]
        )
        getattr(self, "_prefetched_objects_cache", {}).pop("images", None)


class VenueImage(models.Model):
    venue = models.ForeignKey(Venue, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=500)
    is_primary = models.BooleanField(default=False)
    position = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-is_primary", "position", "id"]

    def __str__(self) -> str:
        return f"Image {self.position} of venue {self.venue_id}"
