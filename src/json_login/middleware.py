"""ASGI middleware that runs JSON login and exposes the passport via ContextVar."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

from starlette.responses import JSONResponse

from json_login.errors import AuthenticationError, BadRequestError
from json_login.passport import Passport
from json_login.protocol import Authenticator
from json_login.request import LoginRequest

logger = logging.getLogger(__name__)

# Bridge between ASGI middleware and the downstream app
login_passport_var: ContextVar[Passport | None] = ContextVar("login_passport", default=None)


class JsonLoginMiddleware:
    """ASGI middleware that authenticates JSON login requests.

    Requests the authenticator does not support pass through untouched.
    For supported requests the body is read, credentials are extracted,
    and the resulting ``Passport`` is set on ``login_passport_var`` while
    the wrapped app runs. The wrapped app still receives the full body.

    Args:
        app: The ASGI application to wrap.
        authenticator: An ``Authenticator`` implementation.
    """

    def __init__(self, app: Any, authenticator: Authenticator) -> None:
        self._app = app
        self._authenticator = authenticator

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        if not self._authenticator.supports(LoginRequest.from_scope(scope)):
            await self._app(scope, receive, send)
            return

        body = await self._read_body(receive)
        request = LoginRequest.from_scope(scope, body=body)

        try:
            passport = self._authenticator.authenticate(request)
        except BadRequestError as e:
            await JSONResponse({"error": e.message_key, "detail": e.message}, status_code=400)(scope, receive, send)
            return
        except AuthenticationError as e:
            logger.info("JSON login failed on %s: %s", request.path, e.code)
            response = self._authenticator.on_authentication_failure(request, e)
            await response(scope, receive, send)
            return

        response = self._authenticator.on_authentication_success(request, passport)
        if response is not None:
            await response(scope, receive, send)
            return

        token = login_passport_var.set(passport)
        try:
            await self._app(scope, self._replay(body, receive), send)
        finally:
            login_passport_var.reset(token)

    @staticmethod
    async def _read_body(receive: Any) -> bytes:
        """Consume ``http.request`` messages until the body is complete."""
        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    @staticmethod
    def _replay(body: bytes, receive: Any) -> Any:
        """Build a ``receive`` callable that yields *body* once, then defers to *receive*."""
        sent = False

        async def replay() -> dict[str, Any]:
            nonlocal sent
            if sent:
                return await receive()
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        return replay
