"""Authenticator that reads login credentials from a JSON request body."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from starlette.responses import JSONResponse

from json_login.constants import (
    DEFAULT_PASSWORD_PATH,
    DEFAULT_USERNAME_PATH,
    JSON_FORMAT_SUFFIXES,
    MAX_USERNAME_LENGTH,
)
from json_login.errors import (
    AuthenticationError,
    AuthenticationServiceError,
    BadCredentialsError,
    BadRequestError,
    UserNotFoundError,
)
from json_login.passport import Passport, PasswordCredentials, UserBadge
from json_login.protocol import Authenticator, PathMatcher, UserProvider
from json_login.request import LoginRequest
from json_login.user import User

logger = logging.getLogger(__name__)

SuccessHandler = Callable[[LoginRequest, Passport], Any]
FailureHandler = Callable[[LoginRequest, AuthenticationError], Any]

MISSING = object()


@dataclass(frozen=True)
class JsonLoginOptions:
    """Configuration for ``JsonLoginAuthenticator``.

    Attributes:
        check_path: Only requests to this path (or path template) are handled.
        username_path: Dot-delimited location of the username in the body.
        password_path: Dot-delimited location of the password in the body.
        post_only: Only handle ``POST`` requests.
    """

    check_path: str | None = None
    username_path: str = DEFAULT_USERNAME_PATH
    password_path: str = DEFAULT_PASSWORD_PATH
    post_only: bool = False

    def __post_init__(self) -> None:
        if not self.username_path:
            raise ValueError("username_path must not be empty")
        if not self.password_path:
            raise ValueError("password_path must not be empty")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> JsonLoginOptions:
        """Build options from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            logger.warning("Ignoring unknown json login option(s): %s", ", ".join(unknown))
        return cls(**{key: value for key, value in options.items() if key in known})


def resolve_path(data: Any, path: str) -> Any:
    """Descend into nested JSON objects along a dot-delimited *path*.

    Returns ``MISSING`` when a segment is absent or a non-object is reached
    before the path ends.
    """
    current = data
    for segment in path.split("."):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


class JsonLoginAuthenticator:
    """Extracts a username and password from a JSON login request.

    Password verification is left to a later stage, which reads the
    ``PasswordCredentials`` badge from the returned passport.

    Args:
        http_utils: Path matcher used when ``check_path`` is configured.
        user_provider: Loads the user named in the request.
        success_handler: Optional callable producing a response on success.
        failure_handler: Optional callable producing a response on failure.
        options: A ``JsonLoginOptions`` or a mapping of option names to values.
    """

    def __init__(
        self,
        http_utils: PathMatcher,
        user_provider: UserProvider,
        success_handler: SuccessHandler | None = None,
        failure_handler: FailureHandler | None = None,
        options: JsonLoginOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if options is None:
            options = JsonLoginOptions()
        elif not isinstance(options, JsonLoginOptions):
            options = JsonLoginOptions.from_mapping(options)
        self._http_utils = http_utils
        self._user_provider = user_provider
        self._success_handler = success_handler
        self._failure_handler = failure_handler
        self._options = options

    @property
    def options(self) -> JsonLoginOptions:
        return self._options

    def supports(self, request: LoginRequest) -> bool:
        """Return True if *request* is a JSON login request for this authenticator.

        Never reads the body.
        """
        if self._options.post_only and request.method != "POST":
            return False

        if self._options.check_path is not None:
            return self._http_utils.check_request_path(request, self._options.check_path)

        if request.mime_type == "application/json":
            return True
        return any(
            fmt is not None and fmt.endswith(JSON_FORMAT_SUFFIXES)
            for fmt in (request.content_format, request.request_format)
        )

    def authenticate(self, request: LoginRequest) -> Passport:
        """Extract credentials from *request* and load the matching user.

        Raises:
            BadRequestError: The body is not a JSON object, or a key is missing
                or not a string.
            BadCredentialsError: The username is too long.
            UserNotFoundError: The user provider does not know the username.
            AuthenticationServiceError: The user provider returned something
                other than a ``User``.
        """
        try:
            username, password = self._get_credentials(request)
        except AuthenticationError as e:
            logger.debug("JSON login rejected for %s: %s", request.path, e.message)
            raise

        user = self._user_provider.load_user_by_username(username)
        if not isinstance(user, User):
            raise AuthenticationServiceError("The user provider must return a User object.")

        logger.debug("Extracted JSON login credentials for user %r", username)
        return Passport(UserBadge(username, user), PasswordCredentials(password))

    def on_authentication_success(self, request: LoginRequest, passport: Passport) -> Any | None:
        if self._success_handler is None:
            return None
        return self._success_handler(request, passport)

    def on_authentication_failure(self, request: LoginRequest, error: AuthenticationError) -> Any:
        if self._failure_handler is not None:
            return self._failure_handler(request, error)
        # Unknown users get the same response as a wrong password.
        message_key = BadCredentialsError.message_key if isinstance(error, UserNotFoundError) else error.message_key
        return JSONResponse({"error": message_key}, status_code=401)

    def _get_credentials(self, request: LoginRequest) -> tuple[str, str]:
        try:
            data = json.loads(request.body)
        except (ValueError, UnicodeDecodeError):
            raise BadRequestError("Invalid JSON.") from None
        if not isinstance(data, dict):
            raise BadRequestError("Invalid JSON.")

        username = self._get_string(data, self._options.username_path)
        password = self._get_string(data, self._options.password_path)

        if len(username) > MAX_USERNAME_LENGTH:
            raise BadCredentialsError("Invalid username.")

        return username, password

    @staticmethod
    def _get_string(data: dict[str, Any], path: str) -> str:
        value = resolve_path(data, path)
        if value is MISSING:
            raise BadRequestError(f'The key "{path}" must be provided', details={"key": path})
        if not isinstance(value, str):
            raise BadRequestError(f'The key "{path}" must be a string.', details={"key": path})
        return value


# Verify protocol compliance at import time
assert isinstance(JsonLoginAuthenticator.__new__(JsonLoginAuthenticator), Authenticator)
