"""User domain models for VenueKart.

The marketplace has two kinds of accounts: customers who browse venues and
send inquiries, and venue owners who list venues and accept or decline
those inquiries. Accounts are created unverified and flipped to verified
after a one-time code is confirmed by email (or immediately for Google
sign-in). One-time codes for registration, password reset and email
changes live in ``OtpVerification``.
"""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


MOBILE_VALIDATOR = RegexValidator(
    regex=r"^\d{10}$",
    message=_("Mobile number must be exactly 10 digits."),
)


class CustomUserManager(BaseUserManager):
    """Manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email).lower()

        mobile_number = extra_fields.get("mobile_number")
        if mobile_number:
            extra_fields["mobile_number"] = self.normalize_mobile(mobile_number)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("user_type", CustomUser.UserType.CUSTOMER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_verified", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_mobile(mobile_number: str) -> str:
        """Strip spaces and dashes before storing a mobile number."""
        return mobile_number.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Marketplace account: a customer or a venue owner."""

    class UserType(models.TextChoices):
        CUSTOMER = "customer", _("Customer")
        VENUE_OWNER = "venue-owner", _("Venue owner")

    username = None
    first_name = None
    last_name = None
    name = models.CharField(_("Name"), max_length=255)
    email = models.EmailField(_("Email"), unique=True)
    mobile_number = models.CharField(
        _("Mobile number"),
        max_length=10,
        blank=True,
        validators=[MOBILE_VALIDATOR],
    )
    user_type = models.CharField(
        _("User type"),
        max_length=20,
        choices=UserType.choices,
        default=UserType.CUSTOMER,
    )
    is_verified = models.BooleanField(_("Email verified"), default=False)
    google_id = models.CharField(max_length=64, unique=True, null=True, blank=True)
    profile_picture = models.URLField(max_length=500, blank=True)
    business_name = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_user_type_display()})"

    def get_full_name(self) -> str:
        return self.name

    def get_short_name(self) -> str:
        return self.name.split(" ")[0] if self.name else self.email

    # --- Domain helpers -----------------------------------------------------
    def is_venue_owner(self) -> bool:
        return self.user_type == self.UserType.VENUE_OWNER

    def is_customer(self) -> bool:
        return self.user_type == self.UserType.CUSTOMER

    @property
    def is_social_only(self) -> bool:
        return bool(self.google_id) and not self.has_usable_password()

    def mark_verified(self) -> None:
        self.is_verified = True
        self.save(update_fields=["is_verified", "updated_at"])


class OtpVerification(models.Model):
    """One-time code sent by email, valid for a short time."""

    class Purpose(models.TextChoices):
        REGISTRATION = "registration", _("Registration")
        PASSWORD_RESET = "password_reset", _("Password reset")
        EMAIL_UPDATE = "email_update", _("Email update")

    email = models.EmailField()
    otp = models.CharField(max_length=6)
    purpose = models.CharField(
        max_length=20,
        choices=Purpose.choices,
        default=Purpose.REGISTRATION,
    )
    pending_data = models.JSONField(null=True, blank=True)
    expires_at = models.DateTimeField()
    attempts_left = models.PositiveSmallIntegerField(default=5)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("OTP verification")
        verbose_name_plural = _("OTP verifications")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["email", "purpose"], name="otp_email_purpose_idx"),
            models.Index(fields=["expires_at"], name="otp_expires_at_idx"),
        ]

    def __str__(self) -> str:
        return f"OTP for {self.email} ({self.purpose})"

    @classmethod
    def issue(
        cls,
        email: str,
        purpose: str,
        *,
        pending_data: dict | None = None,
    ) -> "OtpVerification":
        """Replace any earlier code for this email and purpose with a fresh one."""
        cls.objects.filter(email=email, purpose=purpose).delete()
        return cls.objects.create(
            email=email,
            otp=f"{secrets.randbelow(1_000_000):06d}",
            purpose=purpose,
            pending_data=pending_data,
            expires_at=timezone.now() + timedelta(minutes=settings.OTP_TTL_MINUTES),
        )

    @classmethod
    def consume(cls, email: str, otp: str, purpose: str) -> "OtpVerification | None":
        """Return the matching live code, or ``None`` when it is wrong or expired.

        A wrong guess burns one attempt; a code with no attempts left is
        discarded.
        """
        record = cls.objects.filter(email=email, purpose=purpose).first()
        if record is None:
            return None
        if record.is_expired or record.attempts_left == 0:
            record.delete()
            return None
        if not secrets.compare_digest(record.otp, str(otp)):
            record.decrement_attempt()
            return None
        return record

    @property
    def is_expired(self) -> bool:
        return timezone.now() >= self.expires_at

    def decrement_attempt(self) -> None:
        if self.attempts_left > 0:
            self.attempts_left -= 1
            self.save(update_fields=["attempts_left"])


User = CustomUser
