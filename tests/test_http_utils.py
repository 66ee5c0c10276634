"""Tests for HttpUtils path matching."""

from __future__ import annotations

import pytest

from json_login.http_utils import HttpUtils
from json_login.protocol import PathMatcher
from json_login.request import LoginRequest


def test_implements_path_matcher_protocol():
    assert isinstance(HttpUtils(), PathMatcher)


@pytest.mark.parametrize(
    ("path", "request_path", "expected"),
    [
        ("/api/login", "/api/login", True),
        ("/api/login", "/login", False),
        ("/api/login", "/api/login/", False),
        ("/api/login", "/api/login/extra", False),
        ("/api/{tenant}/login", "/api/acme/login", True),
        ("/api/{tenant}/login", "/api/acme/corp/login", False),
        ("/api/{tenant}/login", "/api//login", False),
        ("/users/{user_id:int}/login", "/users/42/login", True),
        ("/users/{user_id:int}/login", "/users/abc/login", False),
    ],
)
def test_check_request_path(path, request_path, expected):
    assert HttpUtils().check_request_path(LoginRequest(path=request_path), path) is expected
