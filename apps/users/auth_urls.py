"""URL routing for authentication endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework_simplejwt.views import TokenRefreshView  # type: ignore

from .auth_views import (
    GoogleCallbackView,
    GoogleLoginView,
    LoginView,
    LogoutView,
    MeView,
    PasswordResetConfirmView,
    PasswordResetRequestView,
    RegisterView,
    ResendOtpView,
    UpdateProfileView,
    VerifyEmailUpdateView,
    VerifyOtpView,
)

app_name = "auth"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("verify-otp/", VerifyOtpView.as_view(), name="verify-otp"),
    path("resend-otp/", ResendOtpView.as_view(), name="resend-otp"),
    path("login/", LoginView.as_view(), name="login"),
    path("refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("update-profile/", UpdateProfileView.as_view(), name="update-profile"),
    path("verify-email-update/", VerifyEmailUpdateView.as_view(), name="verify-email-update"),
    path("forgot-password/", PasswordResetRequestView.as_view(), name="forgot-password"),
    path("reset-password/", PasswordResetConfirmView.as_view(), name="reset-password"),
    path("google/", GoogleLoginView.as_view(), name="google"),
    path("google/callback/", GoogleCallbackView.as_view(), name="google-callback"),
]
