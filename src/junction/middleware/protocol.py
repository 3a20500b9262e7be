"""Middleware protocol.

A middleware is any callable matching::

    def my_mw(ctx: RequestContext) -> Response | None: ...
    async def my_mw(ctx: RequestContext) -> Response | None: ...

Returning a ``Response`` answers the request immediately: no later
middleware, auth, validation or handler runs. Returning ``None`` lets
the request continue.

No base class required. The dispatcher checks the shape, not the lineage.
"""

from collections.abc import Awaitable
from typing import Protocol, TypeAlias

from junction.context import RequestContext
from junction.http.response import Response

MiddlewareResult: TypeAlias = Response | None


class Middleware(Protocol):
    """Protocol for junction middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def require_json(ctx: RequestContext) -> Response | None:
            if ctx.method == "POST" and ctx.request.content_type != "application/json":
                return error_response("Expected JSON", 415)
            return None

        # Class middleware
        class Maintenance:
            def __init__(self, enabled: bool) -> None:
                self.enabled = enabled

            def __call__(self, ctx: RequestContext) -> Response | None:
                return error_response("Down for maintenance", 503) if self.enabled else None
    """

    def __call__(self, ctx: RequestContext) -> MiddlewareResult | Awaitable[MiddlewareResult]: ...
