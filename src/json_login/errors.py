"""Classified errors raised while extracting login credentials."""

from __future__ import annotations

from typing import Any

from json_login.constants import ErrorCodes


class AuthenticationError(Exception):
    """Base class for every failure raised by an authenticator.

    Attributes:
        code: Machine-readable error code from ``ErrorCodes``.
        message: Human-readable description of what went wrong.
        details: Optional extra context (never includes passwords).
        status_code: HTTP status the failure is surfaced as.
        message_key: Safe, generic message shown to clients.
    """

    code: str = ErrorCodes["AUTHENTICATION_ERROR"]
    status_code: int = 401
    message_key: str = "An authentication exception occurred."

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BadRequestError(AuthenticationError):
    """The request body is malformed: invalid JSON or a missing/mistyped key."""

    code = ErrorCodes["BAD_REQUEST"]
    status_code = 400
    message_key = "Bad Request"


class BadCredentialsError(AuthenticationError):
    """The credentials were rejected."""

    code = ErrorCodes["BAD_CREDENTIALS"]
    message_key = "Invalid credentials."


class UserNotFoundError(AuthenticationError):
    """The user provider has no user with the given username."""

    code = ErrorCodes["USER_NOT_FOUND"]
    message_key = "Username could not be found."

    def __init__(self, username: str, message: str = "") -> None:
        super().__init__(message or f'User "{username}" not found.')
        self.username = username


class AuthenticationServiceError(AuthenticationError):
    """A collaborator such as the user provider misbehaved while authenticating."""

    code = ErrorCodes["AUTHENTICATION_SERVICE_ERROR"]
