"""Serializers for image upload requests."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore


class ImageUploadSerializer(serializers.Serializer):
    image_data = serializers.CharField(error_messages={"required": "Image data is required"})
    folder = serializers.CharField(required=False, allow_blank=True, default="")

    def to_internal_value(self, data):  # type: ignore
        # the venue forms post camelCase keys
        if hasattr(data, "get") and "imageData" in data and "image_data" not in data:
            data = {**data, "image_data": data["imageData"]}
        return super().to_internal_value(data)


class MultipleImageUploadSerializer(serializers.Serializer):
    images = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False,
        error_messages={"required": "Images array is required", "empty": "Images array is required"},
    )
    folder = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_images(self, value: list[str]) -> list[str]:
        if len(value) > settings.UPLOAD_MAX_IMAGES:
            raise serializers.ValidationError(f"Maximum {settings.UPLOAD_MAX_IMAGES} images allowed")
        return value
