"""Celery tasks for the users domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework_simplejwt.token_blacklist.models import OutstandingToken  # type: ignore

from .models import OtpVerification

logger = logging.getLogger(__name__)


@shared_task(name="users.purge_expired_otps")
def purge_expired_otps() -> dict[str, int]:
    """Delete one-time codes past their expiry."""
    deleted, _ = OtpVerification.objects.filter(expires_at__lte=timezone.now()).delete()
    if deleted:
        logger.info(f"Purged {deleted} expired OTP records")
    return {"deleted": deleted}


@shared_task(name="users.flush_expired_refresh_tokens")
def flush_expired_refresh_tokens() -> dict[str, int]:
    """Drop refresh tokens (and their blacklist rows) that can no longer be used."""
    deleted, _ = OutstandingToken.objects.filter(expires_at__lte=timezone.now()).delete()
    if deleted:
        logger.info(f"Flushed {deleted} expired refresh token records")
    return {"deleted": deleted}
