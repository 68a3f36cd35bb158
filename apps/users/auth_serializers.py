"""Serializers for authentication flows (register, OTP, login, password reset)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import AuthenticationFailed, NotFound  # type: ignore

from apps.notifications.tasks import enqueue, send_otp_email
from .models import MOBILE_VALIDATOR, OtpVerification


User = get_user_model()


def _send_code(email: str, purpose: str, *, pending_data: dict | None = None) -> OtpVerification:
    record = OtpVerification.issue(email, purpose, pending_data=pending_data)
    enqueue(send_otp_email, email, record.otp, purpose)
    return record


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    user_type = serializers.ChoiceField(choices=User.UserType.choices)
    password = serializers.CharField(min_length=6, write_only=True, required=False, allow_blank=False)
    mobile_number = serializers.CharField(required=False, allow_blank=True, validators=[MOBILE_VALIDATOR])
    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        return value.lower()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["user_type"] == User.UserType.VENUE_OWNER and not attrs.get("password"):
            raise serializers.ValidationError({"password": "Password is required for venue owners."})
        if User.objects.filter(email__iexact=attrs["email"], is_verified=True).exists():
            raise serializers.ValidationError({"email": "User already exists with this email."})
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        email = validated_data["email"]
        # An abandoned, never-verified registration is replaced outright.
        User.objects.filter(email__iexact=email, is_verified=False).delete()
        password = validated_data.pop("password", None)
        user = User.objects.create_user(email=email, password=password, **{
            key: value for key, value in validated_data.items() if key != "email"
        })
        _send_code(email, OtpVerification.Purpose.REGISTRATION)
        return user


class VerifyOtpSerializer(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.CharField(max_length=6)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs["email"].lower()
        record = OtpVerification.consume(email, attrs["otp"], OtpVerification.Purpose.REGISTRATION)
        if record is None:
            raise serializers.ValidationError({"otp": "Invalid or expired OTP."})
        try:
            attrs["user"] = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise NotFound("User not found.")
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        user = validated_data["user"]
        user.mark_verified()
        OtpVerification.objects.filter(email=user.email, purpose=OtpVerification.Purpose.REGISTRATION).delete()
        return user


class ResendOtpSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs["email"].lower()
        if not User.objects.filter(email__iexact=email, is_verified=False).exists():
            raise NotFound("User not found or already verified.")
        attrs["email"] = email
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        return _send_code(validated_data["email"], OtpVerification.Purpose.REGISTRATION)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"], is_verified=True)
        except User.DoesNotExist:
            raise AuthenticationFailed("Invalid credentials.")

        if user.is_social_only:
            raise AuthenticationFailed("This account uses Google sign-in. Please continue with Google.")

        if not user.is_active or not user.check_password(attrs["password"]):
            raise AuthenticationFailed("Invalid credentials.")

        attrs["user"] = user
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh_token = serializers.CharField()


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs["email"].lower()
        if not User.objects.filter(email__iexact=email, is_verified=True).exists():
            raise NotFound("No account found with this email address.")
        attrs["email"] = email
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        return _send_code(validated_data["email"], OtpVerification.Purpose.PASSWORD_RESET)


class PasswordResetConfirmSerializer(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.CharField(max_length=6)
    new_password = serializers.CharField(min_length=6, write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs["email"].lower()
        record = OtpVerification.consume(email, attrs["otp"], OtpVerification.Purpose.PASSWORD_RESET)
        if record is None:
            raise serializers.ValidationError({"otp": "Invalid or expired OTP."})
        try:
            attrs["user"] = User.objects.get(email__iexact=email, is_verified=True)
        except User.DoesNotExist:
            raise NotFound("User not found.")
        attrs["record"] = record
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        user = validated_data["user"]
        user.set_password(validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        validated_data["record"].delete()
        return user


class VerifyEmailUpdateSerializer(serializers.Serializer):
    otp = serializers.CharField(max_length=6)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = self.context["request"].user
        pending = OtpVerification.objects.filter(
            purpose=OtpVerification.Purpose.EMAIL_UPDATE,
            pending_data__user_id=user.id,
        ).first()
        if pending is None:
            raise serializers.ValidationError({"otp": "Invalid or expired OTP."})
        record = OtpVerification.consume(pending.email, attrs["otp"], OtpVerification.Purpose.EMAIL_UPDATE)
        if record is None:
            raise serializers.ValidationError({"otp": "Invalid or expired OTP."})
        if User.objects.filter(email__iexact=record.email).exclude(pk=user.pk).exists():
            raise serializers.ValidationError({"email": "Email is already in use by another account."})
        attrs["record"] = record
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        user = self.context["request"].user
        record = validated_data["record"]
        updates = dict(record.pending_data.get("updates", {}))
        user.email = record.email
        update_fields = ["email", "updated_at"]
        for field, value in updates.items():
            setattr(user, field, value)
            update_fields.append(field)
        user.save(update_fields=update_fields)
        record.delete()
        return user


def start_email_update(user, new_email: str, updates: dict[str, Any]) -> OtpVerification:
    """Hold profile changes until the new address confirms the code sent to it."""
    OtpVerification.objects.filter(
        purpose=OtpVerification.Purpose.EMAIL_UPDATE,
        pending_data__user_id=user.id,
    ).delete()
    return _send_code(
        new_email,
        OtpVerification.Purpose.EMAIL_UPDATE,
        pending_data={"user_id": user.id, "updates": updates},
    )
