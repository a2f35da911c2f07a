"""User manager: account creation and bcrypt password hashing."""

import uuid

import bcrypt
from django.conf import settings
from django.contrib.auth.base_user import BaseUserManager


def _configured_rounds() -> int:
    return getattr(settings, "BCRYPT_ROUNDS", 12)


class UserManager(BaseUserManager):
    """Creates authors and superusers; every stored password is a bcrypt hash."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str, **extra_fields):
        if not email:
            raise ValueError("The Email must be set")
        user = self.model(id=uuid.uuid4(), email=self.normalize_email(email), **extra_fields)
        user.password_hash = self.hash_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        """Create an author account."""
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        if password is None:
            raise ValueError("Password must be provided")
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str, **extra_fields):
        """Create a back-office superuser (used by ``createsuperuser``)."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        if not extra_fields.get("is_staff") or not extra_fields.get("is_superuser"):
            raise ValueError("Superuser must have is_staff=True and is_superuser=True.")
        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def hash_password(raw_password: str) -> str:
        """bcrypt hash of ``raw_password`` at the configured cost (``BCRYPT_ROUNDS``)."""
        hashed = bcrypt.hashpw(raw_password.encode(), bcrypt.gensalt(rounds=_configured_rounds()))
        return hashed.decode()

    @staticmethod
    def verify_password(user, raw_password: str) -> bool:
        if not user.password_hash:
            return False
        try:
            return bcrypt.checkpw(raw_password.encode(), user.password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False

    @staticmethod
    def needs_rehash(password_hash: str) -> bool:
        """True when ``password_hash`` was made with a different cost than configured.

        bcrypt hashes look like ``$2b$<rounds>$<salt+digest>``.
        """
        try:
            rounds = int(password_hash.split("$")[2])
        except (IndexError, ValueError):
            return True
        return rounds != _configured_rounds()


__all__ = ["UserManager"]
