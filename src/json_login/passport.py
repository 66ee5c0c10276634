"""Passports and the badges they carry."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from json_login.errors import BadCredentialsError
from json_login.user import User


@runtime_checkable
class Badge(Protocol):
    """A typed piece of authentication data attached to a ``Passport``."""

    def is_resolved(self) -> bool: ...


BadgeT = TypeVar("BadgeT")


class PasswordCredentials:
    """Plaintext password submitted by the client.

    The password stays readable until a later stage verifies it and calls
    ``mark_resolved()``, which erases it.
    """

    def __init__(self, password: str) -> None:
        self._password: str | None = password
        self._resolved = False

    @property
    def password(self) -> str:
        if self._password is None:
            raise RuntimeError("The password was erased once the credentials were verified.")
        return self._password

    def mark_resolved(self) -> None:
        self._resolved = True
        self._password = None

    def is_resolved(self) -> bool:
        return self._resolved

    def __repr__(self) -> str:
        return f"PasswordCredentials(resolved={self._resolved})"


class UserBadge:
    """Identifies the user the passport belongs to."""

    def __init__(self, username: str, user: User) -> None:
        self.username = username
        self._user = user

    def get_user(self) -> User:
        return self._user

    def is_resolved(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"UserBadge(username={self.username!r})"


class Passport:
    """Everything known about one authentication attempt.

    A passport holds exactly one badge per badge type. Later stages look
    badges up by type, e.g. ``passport.get_badge(PasswordCredentials)``.
    """

    def __init__(self, user_badge: UserBadge, *badges: Any) -> None:
        self._badges: dict[type, Any] = {}
        self.add_badge(user_badge)
        for badge in badges:
            self.add_badge(badge)

    def get_user(self) -> User:
        return self._badges[UserBadge].get_user()

    def add_badge(self, badge: Any) -> Passport:
        if not isinstance(badge, Badge):
            raise TypeError(f"{type(badge).__name__} is not a badge: it must implement is_resolved()")
        self._badges[type(badge)] = badge
        return self

    def has_badge(self, badge_type: type) -> bool:
        return badge_type in self._badges

    def get_badge(self, badge_type: type[BadgeT]) -> BadgeT | None:
        return self._badges.get(badge_type)

    @property
    def badges(self) -> list[Any]:
        return list(self._badges.values())

    def check_if_completely_resolved(self) -> None:
        """Raise ``BadCredentialsError`` if any badge is still unresolved."""
        for badge_type, badge in self._badges.items():
            if not badge.is_resolved():
                raise BadCredentialsError(
                    f"Authentication failed: security badge {badge_type.__name__} is not resolved.",
                    details={"badge": badge_type.__name__},
                )
