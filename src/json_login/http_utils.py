"""Path matching for login requests."""

from __future__ import annotations

import logging

from starlette.routing import compile_path

from json_login.request import LoginRequest

logger = logging.getLogger(__name__)


class HttpUtils:
    """Matches requests against configured paths.

    A plain path such as ``/api/login`` must equal the request path.
    A template such as ``/api/{tenant}/login`` is compiled with Starlette's
    routing rules and must match the whole request path.
    """

    def check_request_path(self, request: LoginRequest, path: str) -> bool:
        """Return True if *request* targets *path*."""
        if "{" not in path:
            return request.path == path

        regex, _, _ = compile_path(path)
        matched = regex.match(request.path) is not None
        logger.debug("Path template %r %s %r", path, "matched" if matched else "did not match", request.path)
        return matched
