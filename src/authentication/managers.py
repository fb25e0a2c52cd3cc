"""Custom user manager for accounts created through Google sign-in."""

from django.contrib.auth.base_user import BaseUserManager


class UserManager(BaseUserManager):
    """Manager creating users keyed by their Google subject identifier.

    Users never log in with a password, so every account gets an unusable
    one.
    """

    use_in_migrations = True

    def create_user(self, google_sub: str, **extra_fields):
        """Create a user for the given Google subject with the default role."""
        if not google_sub:
            raise ValueError("The Google subject identifier must be set")
        user = self.model(google_sub=google_sub, **extra_fields)
        user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, google_sub: str, **extra_fields):
        """Create an Administrator; used by ``createsuperuser``-style tooling."""
        from .models import Role

        extra_fields.setdefault("role", Role.ADMINISTRATOR)
        if extra_fields.get("role") != Role.ADMINISTRATOR:
            raise ValueError("Superuser must have role=Administrator.")
        extra_fields.pop("password", None)
        return self.create_user(google_sub, **extra_fields)


__all__ = ["UserManager"]
