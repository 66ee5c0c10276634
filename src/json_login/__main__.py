"""CLI entry point: python -m json_login."""

from __future__ import annotations

import argparse
import hmac
import logging
import os
import sys
from pathlib import Path

from json_login import serve
from json_login.authenticator import JsonLoginAuthenticator, JsonLoginOptions
from json_login.constants import DEFAULT_PASSWORD_PATH, DEFAULT_USERNAME_PATH
from json_login.http_utils import HttpUtils
from json_login.passport import Passport, PasswordCredentials
from json_login.user import InMemoryUserProvider

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the json-login CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m json_login",
        description="Launch an HTTP server with a JSON login endpoint backed by a users file.",
    )

    parser.add_argument(
        "--users-file",
        type=Path,
        default=None,
        help="JSON file mapping usernames to passwords (default: $JSON_LOGIN_USERS_FILE).",
    )

    # Login options
    parser.add_argument(
        "--check-path",
        default="/login",
        help='Path of the login route (default: "/login").',
    )
    parser.add_argument(
        "--username-path",
        default=DEFAULT_USERNAME_PATH,
        help=f'Dot-delimited location of the username in the body (default: "{DEFAULT_USERNAME_PATH}").',
    )
    parser.add_argument(
        "--password-path",
        default=DEFAULT_PASSWORD_PATH,
        help=f'Dot-delimited location of the password in the body (default: "{DEFAULT_PASSWORD_PATH}").',
    )
    parser.add_argument(
        "--post-only",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Only handle POST login requests (default: True).",
    )

    # Server options
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host address (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port (default: 8000, range: 1-65535).",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO).",
    )

    return parser


def _validate_port(port: int, parser: argparse.ArgumentParser) -> None:
    """Validate port is in range 1-65535."""
    if port < 1 or port > 65535:
        parser.error(f"--port must be in range 1-65535, got {port}")


def _check_plaintext_password(passport: Passport) -> bool:
    """Compare the submitted password with the loaded user's plaintext password."""
    credentials = passport.get_badge(PasswordCredentials)
    stored = passport.get_user().password
    if credentials is None or stored is None:
        return False
    if not hmac.compare_digest(credentials.password.encode(), stored.encode()):
        return False
    credentials.mark_resolved()
    return True


def main() -> None:
    """CLI entry point for the json-login server.

    Exit codes:
        0 - Normal shutdown
        1 - Invalid users file
        2 - Startup failure (argparse error, serve() exception)
    """
    parser = _build_parser()
    args = parser.parse_args()

    _validate_port(args.port, parser)

    # Resolve users file: --users-file → JSON_LOGIN_USERS_FILE env var
    users_file: Path | None = args.users_file
    if users_file is None and os.environ.get("JSON_LOGIN_USERS_FILE"):
        users_file = Path(os.environ["JSON_LOGIN_USERS_FILE"])
    if users_file is None:
        print("Error: --users-file or JSON_LOGIN_USERS_FILE is required.", file=sys.stderr)
        sys.exit(1)
    if not users_file.is_file():
        print(f"Error: --users-file '{users_file}' does not exist.", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        provider = InMemoryUserProvider.from_json_file(users_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    logger.info("Loaded %d user(s) from '%s'.", len(provider), users_file)

    authenticator = JsonLoginAuthenticator(
        HttpUtils(),
        provider,
        options=JsonLoginOptions(
            check_path=args.check_path,
            username_path=args.username_path,
            password_path=args.password_path,
            post_only=args.post_only,
        ),
    )

    try:
        serve(
            authenticator,
            check_credentials=_check_plaintext_password,
            host=args.host,
            port=args.port,
            login_path=args.check_path,
        )
    except Exception:
        logger.exception("Server startup failed.")
        sys.exit(2)


if __name__ == "__main__":
    main()
