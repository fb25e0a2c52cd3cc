"""Authorization policy for users, categories, and articles.

Every function here is pure: it looks only at the caller and the target it
is given and returns a Decision. Handlers resolve the caller and load the
target first, then turn a denial into a 403.

Rules:

- reads are open to everyone, authenticated or not;
- categories are managed by Administrators only;
- articles are created by Writers and Administrators, updated by their owner
  only (Administrators do not override ownership here), and deleted by their
  owner or any Administrator;
- users are updated by themselves or by an Administrator; the owner edits
  profile fields, only an Administrator edits roles.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from authentication.models import Role

PROFILE_FIELDS = frozenset(
    {"name", "birthdate", "gender", "profile_picture_url", "description", "short_description"}
)
ROLE_FIELDS = frozenset({"role"})


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Resource(str, Enum):
    USER = "user"
    CATEGORY = "category"
    ARTICLE = "article"


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check; falsy when the action is denied."""

    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def deny(reason: str) -> Decision:
    return Decision(False, reason)


def is_administrator(user) -> bool:
    return user is not None and user.role == Role.ADMINISTRATOR


def is_owner(user, article) -> bool:
    return user is not None and article is not None and article.user_id == user.pk


def can_manage_category(user) -> Decision:
    if is_administrator(user):
        return ALLOW
    return deny("only Administrators can manage categories")


def can_create_article(user) -> Decision:
    if user is not None and user.role in (Role.WRITER, Role.ADMINISTRATOR):
        return ALLOW
    return deny("only Writers and Administrators can create articles")


def can_update_article(user, article) -> Decision:
    if is_owner(user, article):
        return ALLOW
    return deny("you can only modify articles created by you")


def can_delete_article(user, article) -> Decision:
    if is_owner(user, article) or is_administrator(user):
        return ALLOW
    return deny("you are not authenticated as administrator or this article doesn't belong to you")


def can_update_user(user, target) -> Decision:
    if user is not None and target is not None and user.pk == target.pk:
        return ALLOW
    if is_administrator(user):
        return ALLOW
    return deny("you can only modify your own user")


def updatable_user_fields(user, target) -> frozenset[str]:
    """Fields of ``target`` that ``user`` may change.

    Administrators updating someone else only touch the role; profile data
    stays with its owner.
    """

    if user is None or target is None:
        return frozenset()
    fields: frozenset[str] = frozenset()
    if user.pk == target.pk:
        fields |= PROFILE_FIELDS
    if is_administrator(user):
        fields |= ROLE_FIELDS
    return fields


_Rule = Callable[[Any, Any], Decision]

_RULES: dict[tuple[Resource, Action], _Rule] = {
    (Resource.CATEGORY, Action.CREATE): lambda user, _: can_manage_category(user),
    (Resource.CATEGORY, Action.UPDATE): lambda user, _: can_manage_category(user),
    (Resource.CATEGORY, Action.DELETE): lambda user, _: can_manage_category(user),
    (Resource.ARTICLE, Action.CREATE): lambda user, _: can_create_article(user),
    (Resource.ARTICLE, Action.UPDATE): can_update_article,
    (Resource.ARTICLE, Action.DELETE): can_delete_article,
    (Resource.USER, Action.UPDATE): can_update_user,
}


def authorize(user, action: Action, resource: Resource, target: Optional[Any] = None) -> Decision:
    """Decide whether ``user`` (None when anonymous) may perform ``action``."""

    if action is Action.READ:
        return ALLOW
    if user is None:
        return deny("you must be authenticated")
    rule = _RULES.get((resource, action))
    if rule is None:
        return deny(f"{action.value} is not supported on {resource.value}")
    return rule(user, target)


__all__ = [
    "ALLOW",
    "Action",
    "Decision",
    "PROFILE_FIELDS",
    "ROLE_FIELDS",
    "Resource",
    "authorize",
    "can_create_article",
    "can_delete_article",
    "can_manage_category",
    "can_update_article",
    "can_update_user",
    "deny",
    "is_administrator",
    "is_owner",
    "updatable_user_fields",
]
