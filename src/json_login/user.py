"""Users and a dictionary-backed user provider."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from json_login.errors import UserNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    """A user known to a ``UserProvider``.

    Attributes:
        username: Unique login name.
        password: Stored password (plaintext or hash, depending on the provider).
        roles: Roles granted to the user.
    """

    username: str
    password: str | None = field(default=None, repr=False)
    roles: tuple[str, ...] = ()


class InMemoryUserProvider:
    """Loads users from an in-memory mapping.

    Args:
        users: Usernames mapped to either a password or a ``User``.
    """

    def __init__(self, users: Mapping[str, str | User] | None = None) -> None:
        self._users: dict[str, User] = {}
        for username, entry in (users or {}).items():
            self.create_user(entry if isinstance(entry, User) else User(username=username, password=entry))

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryUserProvider:
        """Load users from a JSON object mapping usernames to passwords."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Users file '{path}' must contain a JSON object")
        for username, password in data.items():
            if not isinstance(password, str):
                raise ValueError(f"Password for user {username!r} in '{path}' must be a string")
        logger.debug("Loaded %d user(s) from '%s'", len(data), path)
        return cls(data)

    def create_user(self, user: User) -> None:
        """Register *user*; usernames are unique."""
        if user.username in self._users:
            raise ValueError(f"User {user.username!r} already exists")
        self._users[user.username] = user

    def load_user_by_username(self, username: str) -> User:
        """Return the user named *username* or raise ``UserNotFoundError``."""
        try:
            return self._users[username]
        except KeyError:
            raise UserNotFoundError(username) from None

    def __len__(self) -> int:
        return len(self._users)
