"""Plugin registry — ordered hook invocation.

Plugins run in registration order at every hook point, one at a time.
Three invocation policies:

- **first response wins** (``on_after_route_register``, ``on_request``,
  ``on_error``): the first plugin returning a ``Response`` stops the
  remaining plugins for that hook point only.
- **chained rewrite** (``on_before_route_register``): each plugin sees
  the config and handler produced by the plugin before it.
- **accumulate** (``on_response``): every plugin runs; a returned
  ``Response`` replaces the current one for the next plugin.
"""

import logging
from typing import Any

from junction._internal.invoke import invoke
from junction._internal.types import Handler
from junction.errors import ConfigurationError
from junction.http.request import Request
from junction.http.response import Response
from junction.plugins.protocol import Plugin, RouteRewrite
from junction.routing.route import RouteConfig

logger = logging.getLogger("junction.plugins")


class PluginRegistry:
    """Holds registered plugins and runs their hooks."""

    __slots__ = ("_plugins",)

    def __init__(self) -> None:
        self._plugins: list[Plugin] = []

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return tuple(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def names(self) -> list[str]:
        return [plugin.name for plugin in self._plugins]

    async def register(self, plugin: Plugin, dispatcher: Any) -> None:
        """Append *plugin* and run its ``on_init`` hook.

        Errors from ``on_init`` propagate to the caller; the plugin stays
        registered.
        """
        name = getattr(plugin, "name", None)
        if not isinstance(name, str) or not name:
            msg = f"Plugin {plugin!r} must have a non-empty string 'name'"
            raise ConfigurationError(msg)
        self._plugins.append(plugin)
        hook = getattr(plugin, "on_init", None)
        if hook is not None:
            await invoke(hook, dispatcher)

    async def _first_response(self, hook_name: str, *args: Any) -> Response | None:
        for plugin in self._plugins:
            hook = getattr(plugin, hook_name, None)
            if hook is None:
                continue
            result = await invoke(hook, *args)
            if isinstance(result, Response):
                logger.debug("Plugin %r answered %s", plugin.name, hook_name)
                return result
        return None

    async def rewrite_route(
        self,
        dispatcher: Any,
        method: str,
        path: str,
        config: RouteConfig,
        handler: Handler,
    ) -> tuple[RouteConfig, Handler]:
        """Fold ``on_before_route_register`` over the plugins."""
        for plugin in self._plugins:
            hook = getattr(plugin, "on_before_route_register", None)
            if hook is None:
                continue
            rewrite = await invoke(hook, dispatcher, method, path, config, handler)
            if rewrite is None:
                continue
            if not isinstance(rewrite, RouteRewrite):
                msg = (
                    f"Plugin {plugin.name!r} on_before_route_register returned "
                    f"{type(rewrite).__name__}, expected RouteRewrite or None"
                )
                raise ConfigurationError(msg)
            if rewrite.config is not None:
                config = rewrite.config
            if rewrite.handler is not None:
                handler = rewrite.handler
        return config, handler

    async def after_route_register(
        self,
        dispatcher: Any,
        method: str,
        path: str,
        config: RouteConfig,
    ) -> Response | None:
        return await self._first_response(
            "on_after_route_register", dispatcher, method, path, config
        )

    async def on_request(self, request: Request) -> Response | None:
        return await self._first_response("on_request", request)

    async def on_error(self, exc: Exception, request: Request) -> Response | None:
        return await self._first_response("on_error", exc, request)

    async def on_response(self, request: Request, response: Response) -> Response:
        for plugin in self._plugins:
            hook = getattr(plugin, "on_response", None)
            if hook is None:
                continue
            result = await invoke(hook, request, response)
            if isinstance(result, Response):
                response = result
        return response
