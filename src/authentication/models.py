"""Custom User model authenticated by email with bcrypt-hashed passwords.

Authors own the articles they write; the back office only relies on the
``is_staff``/``is_superuser`` flags, so Django's groups/permissions tables
(PermissionsMixin) are not used.
"""

import uuid
from typing import Optional, ClassVar

from django.contrib.auth.models import AbstractBaseUser
from django.db import models
from django.utils.crypto import salted_hmac

from .managers import UserManager


class User(AbstractBaseUser):
    """Custom user identified by email with bcrypt password hashes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=128)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    is_superuser = models.BooleanField(default=False)
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    objects = UserManager()

    class Meta:
        """Default ordering shows newest users first."""
        ordering = ["-date_joined"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.email

    @property
    def display_name(self) -> str:
        """Full name when known, otherwise the email address."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def set_password(self, raw_password: Optional[str]) -> None:  # type: ignore[override]
        """Override to ensure bcrypt hashing via manager utility."""

        if raw_password is None:
            self.password_hash = ""
        else:
            self.password_hash = UserManager.hash_password(raw_password)

    def check_password(self, raw_password: Optional[str]) -> bool:  # type: ignore[override]
        """Verify against the bcrypt hash, re-hashing when BCRYPT_ROUNDS has changed."""

        if raw_password is None:
            return False
        if not UserManager.verify_password(self, raw_password):
            return False
        if UserManager.needs_rehash(self.password_hash) and self.pk is not None:
            self.set_password(raw_password)
            self.save(update_fields=["password_hash"])
        return True

    def get_session_auth_hash(self) -> str:
        """Bind sessions to the bcrypt hash so a password change logs out other sessions."""
        return salted_hmac(
            "authentication.User.get_session_auth_hash",
            self.password_hash,
            algorithm="sha256",
        ).hexdigest()

    # Back-office (django.contrib.admin) access is all-or-nothing for superusers.
    def has_perm(self, perm, obj=None) -> bool:
        return self.is_active and self.is_superuser

    def has_module_perms(self, app_label) -> bool:
        return self.is_active and self.is_superuser


__all__ = ["User"]
