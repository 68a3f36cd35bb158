"""JWT helpers shared by the password, OTP and Google sign-in flows."""

from __future__ import annotations

from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore


def tokens_for_user(user) -> dict[str, str]:
    """Issue a refresh/access pair carrying the caller identity claims.

    Claims set on the refresh token are copied into the access token, so
    request handlers can read ``id``, ``email`` and ``user_type`` without a
    database hit.
    """
    refresh = RefreshToken.for_user(user)
    refresh["email"] = user.email
    refresh["user_type"] = user.user_type
    return {"access_token": str(refresh.access_token), "refresh_token": str(refresh)}
