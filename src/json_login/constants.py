"""Constants for json-login."""

from __future__ import annotations

# Usernames longer than this are rejected before the user provider is asked.
MAX_USERNAME_LENGTH: int = 4096

DEFAULT_USERNAME_PATH: str = "username"
DEFAULT_PASSWORD_PATH: str = "password"

# Request formats keyed by name, each listing the MIME types that map to it.
REQUEST_FORMATS: dict[str, tuple[str, ...]] = {
    "html": ("text/html", "application/xhtml+xml"),
    "txt": ("text/plain",),
    "js": ("application/javascript", "application/x-javascript", "text/javascript"),
    "css": ("text/css",),
    "json": ("application/json", "application/x-json"),
    "jsonld": ("application/ld+json",),
    "xml": ("text/xml", "application/xml", "application/x-xml"),
    "rdf": ("application/rdf+xml",),
    "atom": ("application/atom+xml",),
    "form": ("application/x-www-form-urlencoded", "multipart/form-data"),
}

JSON_FORMAT_SUFFIXES: tuple[str, ...] = ("json", "jsonld", "json-ld")

ErrorCodes: dict[str, str] = {
    "AUTHENTICATION_ERROR": "AUTHENTICATION_ERROR",
    "BAD_REQUEST": "BAD_REQUEST",
    "BAD_CREDENTIALS": "BAD_CREDENTIALS",
    "USER_NOT_FOUND": "USER_NOT_FOUND",
    "AUTHENTICATION_SERVICE_ERROR": "AUTHENTICATION_SERVICE_ERROR",
}
