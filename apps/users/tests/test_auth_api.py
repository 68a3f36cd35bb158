"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from django.core import mail
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.users.models import OtpVerification, User


class RegistrationAPITests(APITestCase):
    def _register(self, **overrides):
        payload = {
            "email": "Guest@Example.com",
            "name": "Guest User",
            "user_type": "customer",
            "password": "secret123",
            "mobile_number": "9876543210",
        }
        payload.update(overrides)
        return self.client.post(reverse("auth:register"), payload, format="json")

    def test_register_creates_unverified_user_and_emails_code(self) -> None:
        response = self._register()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["email"], "guest@example.com")
        user = User.objects.get(email="guest@example.com")
        self.assertFalse(user.is_verified)
        record = OtpVerification.objects.get(email="guest@example.com")
        self.assertEqual(len(record.otp), 6)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "VenueKart - Account Verification")
        self.assertIn(record.otp, mail.outbox[0].body)

    def test_venue_owner_needs_password(self) -> None:
        response = self._register(user_type="venue-owner", password="")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

        response = self.client.post(
            reverse("auth:register"),
            {"email": "owner@example.com", "name": "Owner", "user_type": "venue-owner"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "Password is required for venue owners.")

    def test_verified_email_cannot_register_again(self) -> None:
        User.objects.create_user(email="guest@example.com", password="secret123", name="Guest", is_verified=True)

        response = self._register()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "User already exists with this email.")
        self.assertIn("details", response.data)

    def test_unverified_registration_is_replaced(self) -> None:
        stale = User.objects.create_user(email="guest@example.com", password="old-pass", name="Old")

        response = self._register(name="New Name")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertFalse(User.objects.filter(pk=stale.pk).exists())
        self.assertEqual(User.objects.get(email="guest@example.com").name, "New Name")

    def test_mobile_number_must_have_ten_digits(self) -> None:
        response = self._register(mobile_number="12345")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_verify_otp_marks_user_verified_and_returns_tokens(self) -> None:
        self._register()
        record = OtpVerification.objects.get(email="guest@example.com")

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": "guest@example.com", "otp": record.otp},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(User.objects.get(email="guest@example.com").is_verified)
        self.assertFalse(OtpVerification.objects.filter(email="guest@example.com").exists())
        access = AccessToken(response.data["access_token"])
        self.assertEqual(access["email"], "guest@example.com")
        self.assertEqual(access["user_type"], "customer")
        self.assertEqual(access["id"], response.data["user"]["id"])

    def test_wrong_otp_burns_an_attempt(self) -> None:
        self._register()
        record = OtpVerification.objects.get(email="guest@example.com")
        wrong = "000000" if record.otp != "000000" else "111111"

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": "guest@example.com", "otp": wrong},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        record.refresh_from_db()
        self.assertEqual(record.attempts_left, 4)

    def test_expired_otp_is_rejected(self) -> None:
        self._register()
        record = OtpVerification.objects.get(email="guest@example.com")
        OtpVerification.objects.filter(pk=record.pk).update(expires_at=timezone.now() - timedelta(seconds=1))

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": "guest@example.com", "otp": record.otp},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(User.objects.get(email="guest@example.com").is_verified)

    def test_resend_otp_only_for_unverified_users(self) -> None:
        self._register()
        first = OtpVerification.objects.get(email="guest@example.com")

        response = self.client.post(reverse("auth:resend-otp"), {"email": "guest@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(OtpVerification.objects.filter(email="guest@example.com").count(), 1)
        self.assertNotEqual(OtpVerification.objects.get(email="guest@example.com").pk, first.pk)

        response = self.client.post(reverse("auth:resend-otp"), {"email": "nobody@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)


class LoginAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="owner@example.com",
            password="secret123",
            name="Venue Owner",
            user_type=User.UserType.VENUE_OWNER,
            is_verified=True,
        )

    def test_login_returns_session_payload(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "secret123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["user_type"], "venue-owner")
        self.assertIn("access_token", response.data)
        self.assertIn("refresh_token", response.data)

    def test_wrong_password_is_unauthorized(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "wrong-pass"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)
        self.assertEqual(response.data, {"error": "Invalid credentials."})

    def test_unverified_user_cannot_log_in(self) -> None:
        User.objects.create_user(email="new@example.com", password="secret123", name="New")
        response = self.client.post(
            reverse("auth:login"),
            {"email": "new@example.com", "password": "secret123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)

    def test_google_only_account_gets_hint(self) -> None:
        User.objects.create_user(
            email="social@example.com",
            password=None,
            name="Social",
            google_id="g-123",
            is_verified=True,
        )
        response = self.client.post(
            reverse("auth:login"),
            {"email": "social@example.com", "password": "anything"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)
        self.assertIn("Google", response.data["error"])

    def test_refresh_and_logout_blacklists_token(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "secret123"},
            format="json",
        )
        refresh_token = login.data["refresh_token"]

        refreshed = self.client.post(reverse("auth:token_refresh"), {"refresh": refresh_token}, format="json")
        self.assertEqual(refreshed.status_code, status.HTTP_200_OK, refreshed.data)
        self.assertIn("access", refreshed.data)
        latest_refresh = refreshed.data.get("refresh", refresh_token)

        logout = self.client.post(reverse("auth:logout"), {"refresh_token": latest_refresh}, format="json")
        self.assertEqual(logout.status_code, status.HTTP_200_OK, logout.data)

        again = self.client.post(reverse("auth:token_refresh"), {"refresh": latest_refresh}, format="json")
        self.assertEqual(again.status_code, status.HTTP_401_UNAUTHORIZED, again.data)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "owner@example.com")


class PasswordResetAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="reset@example.com", password="OldPassword1", name="Reset", is_verified=True
        )

    def test_password_reset_flow(self) -> None:
        request_resp = self.client.post(
            reverse("auth:forgot-password"), {"email": "reset@example.com"}, format="json"
        )
        self.assertEqual(request_resp.status_code, status.HTTP_200_OK, request_resp.data)
        self.assertEqual(mail.outbox[-1].subject, "VenueKart - Password Reset Verification")

        record = OtpVerification.objects.get(
            email="reset@example.com", purpose=OtpVerification.Purpose.PASSWORD_RESET
        )
        confirm_resp = self.client.post(
            reverse("auth:reset-password"),
            {"email": "reset@example.com", "otp": record.otp, "new_password": "NewPassword1"},
            format="json",
        )

        self.assertEqual(confirm_resp.status_code, status.HTTP_200_OK, confirm_resp.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("NewPassword1"))

    def test_unknown_email_is_not_found(self) -> None:
        response = self.client.post(reverse("auth:forgot-password"), {"email": "ghost@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)


class ProfileUpdateAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="customer@example.com", password="secret123", name="Customer", is_verified=True
        )
        self.client.force_authenticate(self.user)

    def test_plain_profile_update(self) -> None:
        response = self.client.put(
            reverse("auth:update-profile"),
            {"name": "Renamed", "mobile_number": "9123456780"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["requires_verification"])
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, "Renamed")
        self.assertEqual(self.user.mobile_number, "9123456780")

    def test_email_change_waits_for_code(self) -> None:
        response = self.client.put(
            reverse("auth:update-profile"),
            {"email": "fresh@example.com", "name": "Fresh Name"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["requires_verification"])
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "customer@example.com")
        self.assertEqual(mail.outbox[-1].to, ["fresh@example.com"])

        record = OtpVerification.objects.get(purpose=OtpVerification.Purpose.EMAIL_UPDATE)
        verify = self.client.post(reverse("auth:verify-email-update"), {"otp": record.otp}, format="json")

        self.assertEqual(verify.status_code, status.HTTP_200_OK, verify.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "fresh@example.com")
        self.assertEqual(self.user.name, "Fresh Name")


class GoogleSignInAPITests(APITestCase):
    @override_settings(GOOGLE_CLIENT_ID="", GOOGLE_CLIENT_SECRET="")
    def test_unconfigured_google_sign_in(self) -> None:
        response = self.client.get(reverse("auth:google"))
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)

    @override_settings(GOOGLE_CLIENT_ID="client-id", GOOGLE_CLIENT_SECRET="client-secret")
    def test_redirect_carries_user_type_in_state(self) -> None:
        response = self.client.get(reverse("auth:google"), {"user_type": "venue-owner"})
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertIn("accounts.google.com", response["Location"])
        self.assertIn("state=venue-owner", response["Location"])

    @override_settings(GOOGLE_CLIENT_ID="client-id", GOOGLE_CLIENT_SECRET="client-secret")
    @patch("apps.users.google_oauth.fetch_profile")
    def test_callback_creates_verified_user(self, mock_fetch_profile) -> None:
        mock_fetch_profile.return_value = {
            "id": "google-42",
            "email": "Social@Example.com",
            "name": "Social User",
            "picture": "https://example.com/avatar.png",
        }

        response = self.client.get(reverse("auth:google-callback"), {"code": "abc", "state": "venue-owner"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user = User.objects.get(email="social@example.com")
        self.assertTrue(user.is_verified)
        self.assertEqual(user.google_id, "google-42")
        self.assertTrue(user.is_venue_owner())
        self.assertIn("access_token", response.data)
