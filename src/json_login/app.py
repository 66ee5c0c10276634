"""Starlette application serving a JSON login endpoint."""

from __future__ import annotations

import logging
from collections.abc import Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, request_response

from json_login.errors import AuthenticationError
from json_login.middleware import JsonLoginMiddleware, login_passport_var
from json_login.passport import Passport
from json_login.protocol import Authenticator

logger = logging.getLogger(__name__)

CredentialsChecker = Callable[[Passport], bool]


def create_app(
    authenticator: Authenticator,
    check_credentials: CredentialsChecker,
    *,
    login_path: str = "/login",
) -> Starlette:
    """Build a Starlette app with a JSON login route and a health check.

    Only the login route runs the authenticator; other routes never see it.

    Args:
        authenticator: Extracts credentials from login requests.
        check_credentials: Verifies a passport's credentials. It must mark
            every badge it checks as resolved and return True on success.
        login_path: Path of the login route.
    """

    async def _health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def _login(request: Request) -> JSONResponse:
        passport = login_passport_var.get()
        if passport is None:
            return JSONResponse(
                {"error": "Bad Request", "detail": "Expected a JSON login request."},
                status_code=400,
            )

        try:
            if not check_credentials(passport):
                return JSONResponse({"error": "Invalid credentials."}, status_code=401)
            passport.check_if_completely_resolved()
        except AuthenticationError as e:
            logger.info("Credential check failed: %s", e.message)
            return JSONResponse({"error": e.message_key}, status_code=401)

        user = passport.get_user()
        logger.info("User %r logged in", user.username)
        return JSONResponse({"username": user.username, "roles": list(user.roles)})

    return Starlette(
        routes=[
            Route("/health", endpoint=_health, methods=["GET"]),
            Route(
                login_path,
                endpoint=JsonLoginMiddleware(request_response(_login), authenticator),
                methods=["POST"],
            ),
        ],
    )
