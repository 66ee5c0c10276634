"""json-login: extract login credentials from JSON request bodies."""

from __future__ import annotations

import logging

import uvicorn

from json_login.app import CredentialsChecker, create_app
from json_login.authenticator import JsonLoginAuthenticator, JsonLoginOptions
from json_login.constants import MAX_USERNAME_LENGTH, ErrorCodes
from json_login.errors import (
    AuthenticationError,
    AuthenticationServiceError,
    BadCredentialsError,
    BadRequestError,
    UserNotFoundError,
)
from json_login.http_utils import HttpUtils
from json_login.middleware import JsonLoginMiddleware, login_passport_var
from json_login.passport import Badge, Passport, PasswordCredentials, UserBadge
from json_login.protocol import Authenticator, PathMatcher, UserProvider
from json_login.request import LoginRequest
from json_login.user import InMemoryUserProvider, User

__all__ = [
    # Public API
    "serve",
    "create_app",
    # Authenticator
    "Authenticator",
    "JsonLoginAuthenticator",
    "JsonLoginOptions",
    "JsonLoginMiddleware",
    "login_passport_var",
    # Collaborators
    "HttpUtils",
    "PathMatcher",
    "UserProvider",
    "InMemoryUserProvider",
    "User",
    "LoginRequest",
    # Passport
    "Passport",
    "Badge",
    "PasswordCredentials",
    "UserBadge",
    # Errors
    "AuthenticationError",
    "AuthenticationServiceError",
    "BadCredentialsError",
    "BadRequestError",
    "UserNotFoundError",
    # Constants
    "MAX_USERNAME_LENGTH",
    "ErrorCodes",
]

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def serve(
    authenticator: Authenticator,
    *,
    check_credentials: CredentialsChecker,
    host: str = "127.0.0.1",
    port: int = 8000,
    login_path: str = "/login",
    log_level: str | None = None,
) -> None:
    """Run an HTTP server exposing a JSON login endpoint.

    Args:
        authenticator: Extracts credentials from login requests.
        check_credentials: Verifies the credentials on each passport.
        host: Host address to bind.
        port: Port number to bind.
        login_path: Path of the login route.
        log_level: Set the log level for the json_login logger (e.g. "DEBUG", "INFO").
    """
    if not 1 <= port <= 65535:
        raise ValueError(f"port must be in range 1-65535, got {port}")
    if not login_path.startswith("/"):
        raise ValueError(f"login_path must start with '/', got {login_path!r}")
    if log_level is not None:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level.upper() not in valid_levels:
            raise ValueError(f"Unknown log level: {log_level!r}. Valid: {sorted(valid_levels)}")
        logging.getLogger("json_login").setLevel(getattr(logging, log_level.upper()))

    app = create_app(authenticator, check_credentials, login_path=login_path)
    logger.info("Starting JSON login server on %s:%d (login path %s)", host, port, login_path)
    uvicorn.run(app, host=host, port=port, log_level="info")
