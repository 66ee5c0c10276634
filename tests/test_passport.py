"""Tests for Passport and badges."""

from __future__ import annotations

import pytest

from json_login.errors import BadCredentialsError
from json_login.passport import Badge, Passport, PasswordCredentials, UserBadge
from json_login.user import User


def _passport(password: str = "foo") -> Passport:
    return Passport(UserBadge("dunglas", User("dunglas", "pa$$")), PasswordCredentials(password))


class TestPasswordCredentials:
    def test_password_readable_until_resolved(self):
        credentials = PasswordCredentials("foo")
        assert credentials.password == "foo"
        assert credentials.is_resolved() is False

    def test_mark_resolved_erases_password(self):
        credentials = PasswordCredentials("foo")
        credentials.mark_resolved()
        assert credentials.is_resolved() is True
        with pytest.raises(RuntimeError, match="erased"):
            credentials.password

    def test_repr_hides_password(self):
        assert "foo" not in repr(PasswordCredentials("foo"))


class TestPassport:
    def test_get_user(self):
        assert _passport().get_user() == User("dunglas", "pa$$")

    def test_get_badge_by_type(self):
        passport = _passport()
        assert passport.get_badge(PasswordCredentials).password == "foo"
        assert passport.has_badge(UserBadge)

    def test_missing_badge(self):
        passport = Passport(UserBadge("dunglas", User("dunglas")))
        assert passport.get_badge(PasswordCredentials) is None
        assert passport.has_badge(PasswordCredentials) is False

    def test_add_badge_replaces_same_type(self):
        passport = _passport("foo")
        passport.add_badge(PasswordCredentials("bar"))
        assert passport.get_badge(PasswordCredentials).password == "bar"
        assert len(passport.badges) == 2

    def test_add_badge_rejects_non_badge(self):
        with pytest.raises(TypeError, match="not a badge"):
            _passport().add_badge("password")

    def test_badges_implement_protocol(self):
        assert all(isinstance(badge, Badge) for badge in _passport().badges)

    def test_unresolved_passport(self):
        with pytest.raises(BadCredentialsError, match="PasswordCredentials is not resolved") as exc_info:
            _passport().check_if_completely_resolved()
        assert exc_info.value.details == {"badge": "PasswordCredentials"}

    def test_resolved_passport(self):
        passport = _passport()
        passport.get_badge(PasswordCredentials).mark_resolved()
        passport.check_if_completely_resolved()
