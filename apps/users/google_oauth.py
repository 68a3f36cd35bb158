"""
Google sign-in (OAuth 2.0 authorization code flow).

The consent redirect carries the requested account type in ``state`` so
that first-time Google users are created as a customer or venue owner.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import requests
from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore

from .models import User

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
REQUEST_TIMEOUT = 10


class GoogleOAuthError(Exception):
    """Raised when Google rejects the code exchange or profile lookup."""


def is_configured() -> bool:
    return bool(settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET)


def authorization_url(state: str) -> str:
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": "openid email profile",
        "access_type": "online",
        "prompt": "select_account",
        "state": state,
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def fetch_profile(code: str) -> dict:
    """Exchange the authorization code and return Google's profile payload."""
    try:
        token_response = requests.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "redirect_uri": settings.GOOGLE_REDIRECT_URI,
                "grant_type": "authorization_code",
            },
            timeout=REQUEST_TIMEOUT,
        )
        token_response.raise_for_status()
        access_token = token_response.json()["access_token"]

        profile_response = requests.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=REQUEST_TIMEOUT,
        )
        profile_response.raise_for_status()
        profile = profile_response.json()
    except (requests.RequestException, KeyError, ValueError) as exc:
        raise GoogleOAuthError(str(exc)) from exc

    if not profile.get("id") or not profile.get("email"):
        raise GoogleOAuthError("Google profile is missing id or email")
    return profile


@transaction.atomic
def get_or_create_user(profile: dict, user_type: str):
    """Find the account by Google id, then by email, creating it if needed.

    Accounts reached through Google are verified, since Google has already
    confirmed the address.
    """
    google_id = str(profile["id"])
    email = profile["email"].lower()

    user = User.objects.filter(google_id=google_id).first()
    if user is None:
        user = User.objects.filter(email__iexact=email).first()

    if user is None:
        user = User.objects.create_user(
            email=email,
            password=None,
            name=profile.get("name") or email.split("@")[0],
            user_type=user_type,
            google_id=google_id,
            profile_picture=profile.get("picture", ""),
            is_verified=True,
        )
        logger.info(f"Created user {user.id} from Google sign-in")
        return user

    user.google_id = google_id
    user.is_verified = True
    if not user.profile_picture and profile.get("picture"):
        user.profile_picture = profile["picture"]
    user.save(update_fields=["google_id", "is_verified", "profile_picture", "updated_at"])
    return user
