"""Protocols for the authenticator and its collaborators."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from json_login.passport import Passport
from json_login.request import LoginRequest
from json_login.user import User


@runtime_checkable
class Authenticator(Protocol):
    """Protocol for login authenticators.

    ``supports`` decides cheaply whether the authenticator handles a
    request; ``authenticate`` extracts credentials and returns a
    ``Passport`` or raises an ``AuthenticationError``.
    """

    def supports(self, request: LoginRequest) -> bool: ...

    def authenticate(self, request: LoginRequest) -> Passport: ...

    def on_authentication_success(self, request: LoginRequest, passport: Passport) -> Any | None: ...

    def on_authentication_failure(self, request: LoginRequest, error: Exception) -> Any: ...


@runtime_checkable
class UserProvider(Protocol):
    """Loads users by username."""

    def load_user_by_username(self, username: str) -> User:
        """Return the user or raise ``UserNotFoundError``."""
        ...


@runtime_checkable
class PathMatcher(Protocol):
    """Decides whether a request targets a configured path."""

    def check_request_path(self, request: LoginRequest, path: str) -> bool: ...
