"""Views for authentication flows (register, OTP, login, logout, password reset, profile)."""

from __future__ import annotations

import logging

from django.shortcuts import redirect  # type: ignore
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from . import google_oauth
from .auth_serializers import (
    LoginSerializer,
    LogoutSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    RegisterSerializer,
    ResendOtpSerializer,
    VerifyEmailUpdateSerializer,
    VerifyOtpSerializer,
    start_email_update,
)
from .models import User
from .serializers import ProfileUpdateSerializer, UserSerializer
from .tokens import tokens_for_user

logger = logging.getLogger(__name__)


def _session_payload(user, message: str) -> dict:
    return {"message": message, "user": UserSerializer(user).data, **tokens_for_user(user)}


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(
            {"message": "Registration successful. Please verify the OTP sent to your email.", "email": user.email},
            status=status.HTTP_201_CREATED,
        )


class VerifyOtpView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = VerifyOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(_session_payload(user, "Email verified successfully."), status=status.HTTP_200_OK)


class ResendOtpView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = ResendOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "OTP sent successfully."}, status=status.HTTP_200_OK)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        return Response(_session_payload(user, "Login successful."), status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            RefreshToken(serializer.validated_data["refresh_token"]).blacklist()
        except TokenError:
            # Already expired or revoked; the session is gone either way.
            logger.info("Logout with an invalid or already revoked refresh token")
        return Response({"message": "Logged out successfully."}, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)


class UpdateProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):  # type: ignore
        serializer = ProfileUpdateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        user = request.user

        password = data.pop("password", None)
        new_email = data.pop("email", None)

        if new_email and new_email != user.email:
            if password:
                user.set_password(password)
                user.save(update_fields=["password", "updated_at"])
            start_email_update(user, new_email, data)
            return Response(
                {
                    "message": "Verification code sent to the new email address.",
                    "requires_verification": True,
                    "email": new_email,
                },
                status=status.HTTP_200_OK,
            )

        update_fields = ["updated_at"]
        for field, value in data.items():
            setattr(user, field, value)
            update_fields.append(field)
        if password:
            user.set_password(password)
            update_fields.append("password")
        user.save(update_fields=update_fields)
        return Response(
            {"message": "Profile updated successfully.", "requires_verification": False, "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )


class VerifyEmailUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = VerifyEmailUpdateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(_session_payload(user, "Email updated successfully."), status=status.HTTP_200_OK)


class PasswordResetRequestView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "Password reset OTP sent to your email."}, status=status.HTTP_200_OK)


class PasswordResetConfirmView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "Password reset successfully."}, status=status.HTTP_200_OK)


class GoogleLoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def get(self, request):  # type: ignore
        if not google_oauth.is_configured():
            return Response({"error": "Google sign-in is not configured"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        user_type = request.query_params.get("user_type", User.UserType.CUSTOMER)
        if user_type not in User.UserType.values:
            raise ValidationError({"user_type": "Unknown user type."})
        return redirect(google_oauth.authorization_url(state=user_type))


class GoogleCallbackView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def get(self, request):  # type: ignore
        if not google_oauth.is_configured():
            return Response({"error": "Google sign-in is not configured"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        code = request.query_params.get("code")
        if not code:
            raise ValidationError({"code": "Authorization code is missing."})
        user_type = request.query_params.get("state") or User.UserType.CUSTOMER
        if user_type not in User.UserType.values:
            user_type = User.UserType.CUSTOMER

        try:
            profile = google_oauth.fetch_profile(code)
        except google_oauth.GoogleOAuthError as exc:
            logger.warning(f"Google sign-in failed: {exc}")
            return Response({"error": "Google authentication failed"}, status=status.HTTP_502_BAD_GATEWAY)

        user = google_oauth.get_or_create_user(profile, user_type)
        return Response(_session_payload(user, "Login successful."), status=status.HTTP_200_OK)

