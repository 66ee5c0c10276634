"""Request value passed to authenticators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from starlette.datastructures import Headers

from json_login.constants import REQUEST_FORMATS


def format_for_mime_type(mime_type: str | None) -> str | None:
    """Return the request format registered for *mime_type*, if any.

    Parameters such as ``; charset=utf-8`` are ignored.
    """
    if not mime_type:
        return None
    canonical = mime_type.split(";", 1)[0].strip().lower()
    for fmt, mime_types in REQUEST_FORMATS.items():
        if canonical in mime_types:
            return fmt
    return None


@dataclass(frozen=True)
class LoginRequest:
    """The parts of an HTTP request an authenticator looks at.

    Attributes:
        path: URL path, without the query string.
        method: Upper-case HTTP method.
        content_type: Raw ``Content-Type`` header value.
        body: Raw request body.
        accept: Raw ``Accept`` header value.
        format: Explicitly declared request format (e.g. ``"json-ld"``).
    """

    path: str = "/"
    method: str = "GET"
    content_type: str | None = None
    body: bytes = b""
    accept: str | None = None
    format: str | None = None

    @property
    def mime_type(self) -> str | None:
        """The ``Content-Type`` header without parameters."""
        if not self.content_type:
            return None
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def content_format(self) -> str | None:
        """Format of the request body, derived from ``Content-Type``."""
        return format_for_mime_type(self.content_type)

    @property
    def request_format(self) -> str | None:
        """Declared format, falling back to the first recognised ``Accept`` type."""
        if self.format:
            return self.format
        if not self.accept:
            return None
        for candidate in self.accept.split(","):
            fmt = format_for_mime_type(candidate)
            if fmt is not None:
                return fmt
        return None

    @classmethod
    def from_scope(cls, scope: dict[str, Any], body: bytes = b"", format: str | None = None) -> LoginRequest:
        """Build a ``LoginRequest`` from an ASGI HTTP scope."""
        headers = Headers(scope=scope)
        return cls(
            path=scope.get("path", "/"),
            method=scope.get("method", "GET").upper(),
            content_type=headers.get("content-type"),
            body=body,
            accept=headers.get("accept"),
            format=format,
        )
