"""Tests for User and InMemoryUserProvider."""

from __future__ import annotations

import json

import pytest

from json_login.errors import UserNotFoundError
from json_login.protocol import UserProvider
from json_login.user import InMemoryUserProvider, User


class TestUser:
    def test_repr_hides_password(self):
        assert "pa$$" not in repr(User("dunglas", "pa$$"))


class TestInMemoryUserProvider:
    def test_implements_user_provider_protocol(self):
        assert isinstance(InMemoryUserProvider(), UserProvider)

    def test_load_from_passwords(self):
        provider = InMemoryUserProvider({"dunglas": "foo"})
        assert provider.load_user_by_username("dunglas") == User("dunglas", "foo")

    def test_load_from_users(self):
        user = User("dunglas", "foo", roles=("ROLE_ADMIN",))
        provider = InMemoryUserProvider({"dunglas": user})
        assert provider.load_user_by_username("dunglas") is user

    def test_unknown_user(self):
        provider = InMemoryUserProvider({"dunglas": "foo"})
        with pytest.raises(UserNotFoundError) as exc_info:
            provider.load_user_by_username("fabpot")
        assert exc_info.value.username == "fabpot"
        assert exc_info.value.message_key == "Username could not be found."

    def test_create_user_rejects_duplicates(self):
        provider = InMemoryUserProvider({"dunglas": "foo"})
        with pytest.raises(ValueError, match="already exists"):
            provider.create_user(User("dunglas", "bar"))

    def test_len(self):
        assert len(InMemoryUserProvider({"a": "1", "b": "2"})) == 2


class TestFromJsonFile:
    def test_loads_users(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps({"dunglas": "foo", "fabpot": "bar"}))

        provider = InMemoryUserProvider.from_json_file(path)

        assert len(provider) == 2
        assert provider.load_user_by_username("fabpot").password == "bar"

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text('["dunglas"]')
        with pytest.raises(ValueError, match="JSON object"):
            InMemoryUserProvider.from_json_file(path)

    def test_rejects_non_string_password(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text('{"dunglas": 1}')
        with pytest.raises(ValueError, match="must be a string"):
            InMemoryUserProvider.from_json_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("{")
        with pytest.raises(ValueError):
            InMemoryUserProvider.from_json_file(path)
