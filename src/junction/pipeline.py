"""Per-request pipeline.

The fixed stage order for one request::

    plugin on_request
    -> global middleware
    -> path-scoped middleware
    -> route lookup (404 if none)
    -> route middleware
    -> auth gate
    -> validation
    -> handler
    -> default content type
    -> plugin on_response

Each stage is awaited before the next starts. Any stage may answer the
request; everything after it is skipped except the content-type default
and ``on_response``. Exceptions from any stage are translated once.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any

from junction._internal.invoke import invoke, invoke_offloaded
from junction.auth.gate import AuthGate
from junction.config import DispatcherConfig
from junction.context import RequestContext
from junction.errors import ValidationFailed
from junction.http.request import Request
from junction.http.response import Response, error_response, json_response
from junction.middleware.chain import MiddlewareChain, run_middleware
from junction.plugins.registry import PluginRegistry
from junction.routing.table import RouteTable
from junction.translator import ErrorTranslator, validation_error_response
from junction.validation.engine import validate_request

logger = logging.getLogger("junction.dispatcher")


@dataclass(frozen=True, slots=True)
class Pipeline:
    """The frozen collaborators one dispatcher serves requests with."""

    routes: RouteTable
    middleware: MiddlewareChain
    plugins: PluginRegistry
    auth: AuthGate
    translator: ErrorTranslator
    config: DispatcherConfig

    async def handle(self, request: Request) -> Response:
        """Process a single request through every stage."""
        try:
            response = await self._run(request)
        except Exception as exc:
            response = await self.translator.translate(exc, request)

        if response.content_type is None:
            response = replace(response, content_type=self.config.default_content_type)

        return await self.plugins.on_response(request, response)

    async def _run(self, request: Request) -> Response:
        response = await self.plugins.on_request(request)
        if response is not None:
            return response

        ctx = RequestContext(request=request)

        response = await self.middleware.run_global(ctx)
        if response is not None:
            return response

        response = await self.middleware.run_scoped(ctx)
        if response is not None:
            return response

        match = self.routes.match(request.method, request.path)
        if match is None:
            logger.debug("404 %s %s", request.method, request.path)
            return error_response(self.config.not_found_message, 404)

        route = match.route
        ctx = ctx.with_match(route, match.path_params)

        response = await run_middleware(ctx, route.middleware)
        if response is not None:
            return response

        outcome = await self.auth.authenticate(ctx, route.config.auth)
        if outcome.response is not None:
            return outcome.response
        ctx = outcome.context

        try:
            data = await validate_request(request, match.path_params, route.config.validation)
        except ValidationFailed as exc:
            logger.debug("400 %s %s — %s", request.method, request.path, ", ".join(exc.facets))
            return validation_error_response(exc)
        ctx = ctx.with_data(data)

        call = invoke_offloaded if self.config.offload_sync else invoke
        result = await call(route.handler, ctx)
        return to_response(result)


def to_response(result: Any) -> Response:
    """Convert a handler's return value to a ``Response``.

    - ``Response`` -> as-is
    - ``(value, status)`` -> converted value with that status
    - ``dict`` / ``list`` -> JSON
    - ``str`` / ``bytes`` -> body, content type left for the dispatcher default
    - ``None`` -> empty 204
    """
    if isinstance(result, Response):
        return result
    if isinstance(result, tuple) and len(result) == 2 and isinstance(result[1], int):
        value, status = result
        return to_response(value).with_status(status)
    if isinstance(result, dict | list):
        return json_response(result)
    if isinstance(result, str | bytes):
        return Response(body=result)
    if result is None:
        return Response(status=204)
    msg = (
        f"Handler returned {type(result).__name__}; "
        "expected Response, dict, list, str, bytes or None"
    )
    raise TypeError(msg)
