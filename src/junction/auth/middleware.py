"""Auth as plain middleware.

For apps that want a whole path prefix behind a verify step without
declaring ``auth`` on every route::

    dispatcher.use(auth_middleware(AuthConfig(verify=check_api_key)), path="/admin")

Unlike route-level auth, middleware cannot attach a payload; it only
lets the request through or answers it.
"""

import logging

from junction._internal.invoke import invoke
from junction.auth.config import AuthConfig
from junction.context import RequestContext
from junction.http.response import Response

logger = logging.getLogger("junction.auth")


def auth_middleware(config: AuthConfig):
    """Build a middleware that short-circuits requests failing *config*.verify.

    Failures answer with ``config.on_error(exc)`` when set, otherwise a
    plain-text ``401 Unauthorized``.
    """

    async def authenticate(ctx: RequestContext) -> Response | None:
        try:
            await invoke(config.verify, ctx.request)
        except Exception as exc:  # noqa: BLE001 -- any raise is a verify failure
            logger.debug("Auth middleware rejected %s %s: %s", ctx.method, ctx.path, exc)
            if config.on_error is not None:
                mapped = await invoke(config.on_error, exc)
                if isinstance(mapped, Response):
                    return mapped
                if mapped is not None:
                    msg = (
                        f"Auth error mapper {config.on_error!r} returned "
                        f"{type(mapped).__name__}, expected Response or None"
                    )
                    raise TypeError(msg)
            return Response(
                body="Unauthorized", status=401, content_type="text/plain; charset=utf-8"
            )
        return None

    return authenticate
