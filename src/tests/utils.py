"""Shared helpers for tests (fake Redis, fake Google, in-memory stores, user creation)."""

from __future__ import annotations

import fnmatch
import threading
from typing import Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from rest_framework.test import APIClient

from articles.models import Article
from authentication.models import Role
from authentication.oauth import GoogleUserInfo, ProviderError
from authentication.repositories import DjangoUsersRepository, DuplicateUser
from authentication.services import GoogleIdentityResolver
from categories.models import Category
from categories.repositories import CategoryInUse
from core.dependencies import override_dependencies
from core.exceptions import Unauthenticated

User = get_user_model()


class FakeRedis:
    """Minimal Redis stub supporting the commands used by LocalTokenStore.

    Each command runs under a lock, so like a real server every single
    command is atomic while sequences of commands are not.
    """

    def __init__(self):
        self._store: Dict[str, str] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: str, get: bool = False):
        """Mimic Redis SET; with ``get=True`` return the value it replaced."""
        with self._lock:
            previous = self._store.get(key)
            self._store[key] = value
        return previous if get else True

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        with self._lock:
            return self._store.get(key)

    def delete(self, *keys: str) -> int:
        removed = 0
        with self._lock:
            for key in keys:
                if self._store.pop(key, None) is not None:
                    removed += 1
        return removed

    def keys(self, pattern: str = "*") -> List[str]:
        with self._lock:
            return [key for key in self._store if fnmatch.fnmatchcase(key, pattern)]


class FakeOAuthClient:
    """Stand-in for GoogleOAuthClient.

    ``profiles`` maps Google access tokens to the profile the userinfo
    endpoint would return; ``codes`` maps authorization codes to the token
    dict the token endpoint would return. Unknown values fail like Google.
    """

    def __init__(self, profiles: Optional[Dict[str, GoogleUserInfo]] = None, codes: Optional[Dict[str, dict]] = None):
        self.profiles = dict(profiles or {})
        self.codes = dict(codes or {})
        self.userinfo_calls: List[str] = []

    def authorization_url(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/auth?client_id=test-client-id&state={state}"

    def exchange_code(self, code: str) -> dict:
        if code not in self.codes:
            raise ProviderError("failed to exchange token: invalid_grant")
        return dict(self.codes[code])

    def fetch_user_info(self, access_token: str) -> GoogleUserInfo:
        self.userinfo_calls.append(access_token)
        if access_token not in self.profiles:
            raise ProviderError("userinfo returned status 401")
        return self.profiles[access_token]


class InMemoryUsersRepository:
    """UsersRepository keeping unsaved User instances in a dict."""

    def __init__(self):
        self.rows: Dict[int, User] = {}
        self._next_id = 1

    def add(self, **fields) -> User:
        user = User(**fields)
        return self.create(user)

    def get_all(self) -> List[User]:
        return [self.rows[key] for key in sorted(self.rows)]

    def get(self, user_id: int):
        return self.rows.get(user_id)

    def get_by_sub(self, google_sub: str):
        for user in self.rows.values():
            if user.google_sub == google_sub:
                return user
        return None

    def create(self, user):
        if self.get_by_sub(user.google_sub) is not None:
            raise DuplicateUser(user.google_sub)
        user.pk = self._next_id
        self._next_id += 1
        self.rows[user.pk] = user
        return user

    def update(self, user):
        self.rows[user.pk] = user
        return user


class RacingUsersRepository(InMemoryUsersRepository):
    """Simulates a concurrent first login: the lookup misses, the insert clashes."""

    def __init__(self, winner_sub: str):
        super().__init__()
        self.winner_sub = winner_sub
        self.lookups = 0

    def get_by_sub(self, google_sub: str):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return super().get_by_sub(google_sub)

    def create(self, user):
        if user.google_sub == self.winner_sub and not self.rows:
            super().create(User(google_sub=self.winner_sub, name="first", role=Role.READER))
            raise DuplicateUser(user.google_sub)
        return super().create(user)


class InMemoryCategoriesRepository:
    """CategoriesRepository over a dict; refuses to delete categories in use."""

    def __init__(self, articles: Optional["InMemoryArticlesRepository"] = None):
        self.rows: Dict[int, Category] = {}
        self.articles = articles
        self._next_id = 1

    def add(self, name: str, image_url: str = "") -> Category:
        return self.create(Category(name=name, image_url=image_url))

    def get_all(self) -> List[Category]:
        return [self.rows[key] for key in sorted(self.rows)]

    def get(self, category_id: int):
        return self.rows.get(category_id)

    def create(self, category):
        category.pk = self._next_id
        self._next_id += 1
        self.rows[category.pk] = category
        return category

    def update(self, category):
        self.rows[category.pk] = category
        return category

    def delete(self, category_id: int) -> None:
        if self.articles is not None and any(
            article.category_id == category_id for article in self.articles.rows.values()
        ):
            raise CategoryInUse(category_id)
        self.rows.pop(category_id, None)


class InMemoryArticlesRepository:
    """ArticlesRepository over a dict; author and category stay attached."""

    def __init__(self):
        self.rows: Dict[int, Article] = {}
        self._next_id = 1

    def add(self, user, category, title: str, **fields) -> Article:
        return self.create(Article(user=user, category=category, title=title, **fields))

    def get_all(self) -> List[Article]:
        return [self.rows[key] for key in sorted(self.rows)]

    def get(self, article_id: int):
        return self.rows.get(article_id)

    def create(self, article):
        article.pk = self._next_id
        self._next_id += 1
        self.rows[article.pk] = article
        return article

    def update(self, article):
        self.rows[article.pk] = article
        return article

    def delete(self, article_id: int) -> None:
        self.rows.pop(article_id, None)


class BrokenArticlesRepository(InMemoryArticlesRepository):
    """Every mutation fails the way an unreachable database would."""

    def create(self, article):
        raise DatabaseError("connection refused")

    def update(self, article):
        raise DatabaseError("connection refused")

    def delete(self, article_id: int) -> None:
        raise DatabaseError("connection refused")


class FakeIdentityResolver:
    """Maps fixed token strings to users of a repository, like a test login."""

    def __init__(self, users, tokens: Optional[Dict[str, int]] = None):
        self.users = users
        self.tokens = dict(tokens or {})

    def resolve(self, access_token: str):
        user_id = self.tokens.get(access_token)
        user = self.users.get(user_id) if user_id is not None else None
        if user is None:
            raise Unauthenticated()
        return user

    def credential_for(self, user, provider_token: dict) -> dict:
        return {"accessToken": provider_token["access_token"], "tokenType": "Bearer"}


def google_profile(sub: str, name: str = "", picture: str = "") -> GoogleUserInfo:
    """Build the profile a Google userinfo call would return."""

    return GoogleUserInfo(sub=sub, name=name, picture=picture, email=f"{sub}@example.com")


def create_user(google_sub: str, role: Role = Role.READER, **extra):
    """Create a persisted user for tests."""

    return User.objects.create_user(google_sub, role=role, **extra)


def use_dependencies(test_case, **overrides):
    """Apply ``override_dependencies`` for the duration of one test."""

    context = override_dependencies(**overrides)
    deps = context.__enter__()
    test_case.addCleanup(context.__exit__, None, None, None)
    return deps


def use_google_tokens(test_case, tokens: Dict[str, GoogleUserInfo]):
    """Route identity resolution through the real resolver and a fake Google.

    Users are stored in the database, so handlers see the same rows the test
    creates with ``create_user``.
    """

    oauth_client = FakeOAuthClient(profiles=tokens)
    users = DjangoUsersRepository()
    return use_dependencies(
        test_case,
        users=users,
        oauth_client=oauth_client,
        identity_resolver=GoogleIdentityResolver(users, oauth_client),
    )


def client_with_token(token: Optional[str] = None) -> APIClient:
    """Return an APIClient sending ``token`` in the AccessToken header."""

    client = APIClient()
    if token is not None:
        client.credentials(HTTP_ACCESSTOKEN=token)
    return client
