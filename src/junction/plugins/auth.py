"""Auth plugin.

Moves authentication out of the dispatcher and into the route handler.
At registration, every route that declares ``auth`` gets its handler
wrapped; the wrapper verifies, attaches the payload, validates, and
only then calls the original handler::

    await dispatcher.register_plugin(AuthPlugin(AuthConfig(verify=check_token)))
    await dispatcher.get("/me", RouteConfig(auth=True), me)

Routes without ``auth`` are registered untouched. The rewritten route
carries no ``auth`` or ``validation`` of its own, so the dispatcher does
not authenticate or validate the request a second time.
"""

import logging
from dataclasses import replace
from typing import Any

from junction._internal.invoke import invoke
from junction.auth.config import AuthConfig
from junction.auth.gate import AuthGate
from junction.context import RequestContext
from junction.plugins.protocol import RouteRewrite
from junction.routing.route import RouteConfig
from junction.validation.engine import validate_request

logger = logging.getLogger("junction.plugins")


class AuthPlugin:
    """Per-route authentication applied by handler rewriting.

    ``config`` is the global ``AuthConfig`` that ``auth=True`` routes
    use. It is read on every request, so ``configure_auth`` also affects
    routes registered earlier.
    """

    name = "auth"

    __slots__ = ("config",)

    def __init__(self, config: AuthConfig | None = None) -> None:
        self.config = config

    def configure_auth(self, config: AuthConfig) -> None:
        self.config = config

    # -- Hooks --

    def on_before_route_register(
        self,
        dispatcher: Any,
        method: str,
        path: str,
        config: RouteConfig,
        handler: Any,
    ) -> RouteRewrite | None:
        if not config.auth:
            return None

        route_auth = config.auth
        schema = config.validation

        async def authenticated(ctx: RequestContext) -> Any:
            outcome = await AuthGate(self.config).authenticate(ctx, route_auth)
            if outcome.response is not None:
                return outcome.response
            data = await validate_request(ctx.request, ctx.path_params, schema)
            return await invoke(handler, outcome.context.with_data(data))

        logger.debug("Auth plugin guarding %s %s", method, path)
        return RouteRewrite(
            config=replace(config, auth=None, validation=None),
            handler=authenticated,
        )
