"""Shared test fixtures for json-login tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from json_login.authenticator import JsonLoginAuthenticator
from json_login.http_utils import HttpUtils
from json_login.request import LoginRequest
from json_login.user import User

CREDENTIALS_BODY = b'{"username": "dunglas", "password": "foo"}'


def json_request(body: bytes | str = b"", **kwargs: Any) -> LoginRequest:
    """A request declaring ``application/json`` with the given body."""
    if isinstance(body, str):
        body = body.encode()
    kwargs.setdefault("content_type", "application/json")
    return LoginRequest(body=body, **kwargs)


@pytest.fixture
def user_provider() -> MagicMock:
    provider = MagicMock()
    provider.load_user_by_username.return_value = User("dunglas", "pa$$")
    return provider


@pytest.fixture
def make_authenticator(user_provider: MagicMock):
    """Factory building a ``JsonLoginAuthenticator`` with the given options."""

    def _make(options: dict[str, Any] | None = None, **kwargs: Any) -> JsonLoginAuthenticator:
        return JsonLoginAuthenticator(HttpUtils(), user_provider, options=options, **kwargs)

    return _make
