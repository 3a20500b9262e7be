"""Error translation — exceptions to responses.

One entry point, ``ErrorTranslator.translate``, called once per failing
request. Resolution order:

1. ``ValidationFailed`` -> 400 listing every failing facet
2. plugin ``on_error`` hooks (first response wins)
3. the dispatcher's global error handler, if configured
4. defaults: ``HTTPError`` at its own status, anything else 500
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from junction._internal.invoke import invoke
from junction._internal.types import ErrorHandler
from junction.config import DispatcherConfig
from junction.errors import HTTPError, ValidationFailed
from junction.http.request import Request
from junction.http.response import Response, error_response, json_response
from junction.plugins.registry import PluginRegistry

logger = logging.getLogger("junction.dispatcher")


def validation_error_response(exc: ValidationFailed) -> Response:
    """``400 {"error": "Validation failed", "details": [{type, messages}, ...]}``."""
    return error_response("Validation failed", 400, details=exc.to_details())


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers. Non-Response return values
    are encoded as JSON with status 500.
    """
    sig = inspect.signature(handler)
    params = list(sig.parameters.values())

    if len(params) >= 2:
        result = await invoke(handler, request, exc)
    elif len(params) == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)

    if isinstance(result, Response):
        return result
    return json_response(result, status=500)


class ErrorTranslator:
    """Converts pipeline exceptions into responses."""

    __slots__ = ("_config", "_error_handler", "_plugins")

    def __init__(
        self,
        plugins: PluginRegistry,
        *,
        error_handler: ErrorHandler | None = None,
        config: DispatcherConfig | None = None,
    ) -> None:
        self._plugins = plugins
        self._error_handler = error_handler
        self._config = config or DispatcherConfig()

    async def translate(self, exc: Exception, request: Request) -> Response:
        if isinstance(exc, ValidationFailed):
            logger.debug("400 %s %s — %s", request.method, request.path, ", ".join(exc.facets))
            return validation_error_response(exc)

        response = await self._plugins.on_error(exc, request)
        if response is not None:
            return response

        if self._error_handler is not None:
            return await call_error_handler(self._error_handler, request, exc)

        return self.default_response(exc, request)

    def default_response(self, exc: Exception, request: Request) -> Response:
        """The built-in fallback when neither plugins nor a handler answered."""
        if isinstance(exc, HTTPError):
            logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
            response = error_response(exc.detail or f"Error {exc.status}", exc.status)
            return response.with_headers(exc.headers) if exc.headers else response

        logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
        extra: dict[str, Any] = {"message": self._message(exc)}
        if self._config.debug:
            extra["exception"] = type(exc).__qualname__
        return error_response("Internal Server Error", 500, **extra)

    def _message(self, exc: Exception) -> str:
        # Only the exception's own message is exposed, never its repr
        try:
            text = str(exc)
        except Exception:  # noqa: BLE001 -- a broken __str__ must not mask the error
            text = ""
        return text or self._config.error_fallback_message
