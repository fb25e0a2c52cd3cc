"""User store: the capability interface and its Django ORM implementation."""

from typing import Protocol

from django.db import IntegrityError, transaction

from .models import User


class DuplicateUser(Exception):
    """Raised when a user with the same Google subject already exists."""


class UsersRepository(Protocol):
    """Persistence operations the request handlers need for users."""

    def get_all(self) -> list[User]: ...

    def get(self, user_id: int) -> User | None: ...

    def get_by_sub(self, google_sub: str) -> User | None: ...

    def create(self, user: User) -> User: ...

    def update(self, user: User) -> User: ...


class DjangoUsersRepository:
    """UsersRepository backed by the default database."""

    def get_all(self) -> list[User]:
        return list(User.objects.all())

    def get(self, user_id: int) -> User | None:
        return User.objects.filter(pk=user_id).first()

    def get_by_sub(self, google_sub: str) -> User | None:
        return User.objects.filter(google_sub=google_sub).first()

    def create(self, user: User) -> User:
        """Insert a new user; a clash on ``google_sub`` raises DuplicateUser.

        The insert runs in its own savepoint so a uniqueness violation leaves
        any surrounding transaction usable for the follow-up lookup.
        """
        if not user.password:
            user.set_unusable_password()
        try:
            with transaction.atomic():
                user.save(force_insert=True)
        except IntegrityError as exc:
            raise DuplicateUser(user.google_sub) from exc
        return user

    def update(self, user: User) -> User:
        user.save()
        return user


__all__ = ["DuplicateUser", "UsersRepository", "DjangoUsersRepository"]
