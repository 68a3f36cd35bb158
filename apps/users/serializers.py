"""Serializers for user-related API endpoints."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import MOBILE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public profile of the authenticated user."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "mobile_number",
            "user_type",
            "is_verified",
            "profile_picture",
            "business_name",
            "location",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Profile edits. An email change is held back until the new address is verified."""

    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False)
    mobile_number = serializers.CharField(
        required=False,
        allow_blank=True,
        validators=[MOBILE_VALIDATOR],
    )
    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    password = serializers.CharField(min_length=6, required=False, write_only=True)

    def validate_email(self, value: str) -> str:
        value = value.lower()
        user = self.context["request"].user
        if value != user.email and User.objects.filter(email__iexact=value).exclude(pk=user.pk).exists():
            raise serializers.ValidationError("Email is already in use by another account.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if not attrs:
            raise serializers.ValidationError("Nothing to update.")
        return attrs
