"""Structured error plugin.

Turns every unexpected exception into a JSON error response before the
dispatcher's global error handler is consulted::

    await dispatcher.register_plugin(ErrorHandlingPlugin(log_errors=True))

    raise HTTPError(409, "Email taken", code="CONFLICT", details={"field": "email"})
    # -> 409 {"error": "Email taken", "details": {"code": "CONFLICT", "details": {...}}}
"""

import logging
import traceback
from typing import Any

from junction.errors import HTTPError
from junction.http.request import Request
from junction.http.response import Response, error_response

_default_logger = logging.getLogger("junction.plugins")


class ErrorHandlingPlugin:
    """Render ``HTTPError`` at its status and anything else as a 500."""

    name = "error-handling"

    __slots__ = ("expose_stack_trace", "log_errors", "logger")

    def __init__(
        self,
        *,
        log_errors: bool = False,
        logger: logging.Logger | None = None,
        expose_stack_trace: bool = False,
    ) -> None:
        self.log_errors = log_errors
        self.logger = logger or _default_logger
        self.expose_stack_trace = expose_stack_trace

    def _stack(self, exc: BaseException) -> str:
        return "".join(traceback.format_exception(exc))

    def on_error(self, exc: Exception, request: Request) -> Response:
        if self.log_errors:
            self.logger.error(
                "Unhandled error for %s %s", request.method, request.path, exc_info=exc
            )

        info: dict[str, Any] = {}
        if isinstance(exc, HTTPError):
            info["code"] = exc.code
            if exc.details is not None:
                info["details"] = exc.details
            if self.expose_stack_trace:
                info["stack"] = self._stack(exc)
            response = error_response(exc.detail or str(exc.status), exc.status, details=info)
            return response.with_headers(exc.headers) if exc.headers else response

        info["error"] = "INTERNAL_ERROR"
        if self.expose_stack_trace:
            info["stack"] = self._stack(exc)
        return error_response(str(exc) or "Unexpected error", 500, details=info)
