"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(ctx: RequestContext) -> Response | None

Built-in middleware:
    auth_middleware -- Verify-step gate for a whole path prefix
"""

from junction.auth.middleware import auth_middleware
from junction.middleware.chain import MiddlewareChain, run_middleware
from junction.middleware.protocol import Middleware, MiddlewareResult

__all__ = [
    "Middleware",
    "MiddlewareChain",
    "MiddlewareResult",
    "auth_middleware",
    "run_middleware",
]
