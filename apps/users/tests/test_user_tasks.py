"""Tests for periodic cleanup tasks of the users domain."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.users.models import OtpVerification
from apps.users.tasks import purge_expired_otps


@pytest.mark.django_db
def test_purge_expired_otps_keeps_live_codes() -> None:
    live = OtpVerification.issue("live@example.com", OtpVerification.Purpose.REGISTRATION)
    stale = OtpVerification.issue("stale@example.com", OtpVerification.Purpose.REGISTRATION)
    OtpVerification.objects.filter(pk=stale.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

    result = purge_expired_otps()

    assert result == {"deleted": 1}
    assert OtpVerification.objects.filter(pk=live.pk).exists()
    assert not OtpVerification.objects.filter(pk=stale.pk).exists()


@pytest.mark.django_db
def test_issue_replaces_previous_code_for_same_purpose() -> None:
    first = OtpVerification.issue("user@example.com", OtpVerification.Purpose.PASSWORD_RESET)
    other_purpose = OtpVerification.issue("user@example.com", OtpVerification.Purpose.REGISTRATION)
    second = OtpVerification.issue("user@example.com", OtpVerification.Purpose.PASSWORD_RESET)

    assert not OtpVerification.objects.filter(pk=first.pk).exists()
    assert OtpVerification.objects.filter(pk=other_purpose.pk).exists()
    assert second.otp.isdigit() and len(second.otp) == 6
