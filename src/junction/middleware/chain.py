"""Middleware tiers and the short-circuit runner.

Three tiers run in a fixed order:

1. global middleware (registered without a path)
2. path-scoped middleware, grouped by prefix; every group whose prefix
   the request path starts with runs, groups in the order their prefix
   was first registered
3. the matched route's own middleware (run by the pipeline after lookup)

Within a tier, registration order is preserved. The first ``Response``
from any middleware ends the pipeline.
"""

from collections.abc import Iterable

from junction._internal.invoke import invoke
from junction.context import RequestContext
from junction.http.response import Response
from junction.middleware.protocol import Middleware


async def run_middleware(
    ctx: RequestContext,
    middleware: Iterable[Middleware],
) -> Response | None:
    """Run *middleware* in order; return the first response, or ``None``."""
    for mw in middleware:
        result = await invoke(mw, ctx)
        if result is not None:
            if not isinstance(result, Response):
                msg = (
                    f"Middleware {mw!r} returned {type(result).__name__}, "
                    "expected Response or None"
                )
                raise TypeError(msg)
            return result
    return None


class MiddlewareChain:
    """Global and path-scoped middleware registered on a dispatcher."""

    __slots__ = ("_frozen", "_global", "_scoped")

    def __init__(self) -> None:
        self._global: list[Middleware] = []
        self._scoped: dict[str, list[Middleware]] = {}
        self._frozen = False

    def add(self, middleware: Middleware, path: str | None = None) -> None:
        """Register *middleware* globally, or under a path prefix."""
        if self._frozen:
            msg = "Cannot add middleware after the chain is frozen."
            raise RuntimeError(msg)
        if path:
            self._scoped.setdefault(path, []).append(middleware)
        else:
            self._global.append(middleware)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def global_middleware(self) -> tuple[Middleware, ...]:
        return tuple(self._global)

    def scoped_for(self, path: str) -> list[Middleware]:
        """Path-scoped middleware applying to *path*, in run order."""
        result: list[Middleware] = []
        for prefix, group in self._scoped.items():
            if path.startswith(prefix):
                result.extend(group)
        return result

    async def run_global(self, ctx: RequestContext) -> Response | None:
        return await run_middleware(ctx, self._global)

    async def run_scoped(self, ctx: RequestContext) -> Response | None:
        return await run_middleware(ctx, self.scoped_for(ctx.path))

    def __len__(self) -> int:
        return len(self._global) + sum(len(group) for group in self._scoped.values())
