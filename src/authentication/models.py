"""User model keyed by the Google subject identifier, with a coarse role.

There is no password login: accounts are created on first successful Google
sign-in, so ``AbstractBaseUser`` is only used for its integration with
``AUTH_USER_MODEL``.
"""

from typing import ClassVar

from django.contrib.auth.base_user import AbstractBaseUser
from django.db import models

from .managers import UserManager


class Role(models.TextChoices):
    """Permission tier attached to every user."""

    READER = "Reader", "Reader"
    WRITER = "Writer", "Writer"
    ADMINISTRATOR = "Administrator", "Administrator"


class User(AbstractBaseUser):
    """Blog user, created lazily the first time a Google account signs in."""

    google_sub = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255, blank=True)
    birthdate = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=50, blank=True)
    profile_picture_url = models.CharField(max_length=1024, blank=True)
    description = models.TextField(blank=True)
    short_description = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.READER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "google_sub"
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    objects = UserManager()

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name or self.google_sub

    @property
    def is_administrator(self) -> bool:
        return self.role == Role.ADMINISTRATOR


__all__ = ["Role", "User"]
