"""Plugin protocol.

A plugin is any object with a ``name`` and any subset of six hooks::

    on_init(dispatcher)
    on_before_route_register(dispatcher, method, path, config, handler) -> RouteRewrite | None
    on_after_route_register(dispatcher, method, path, config)
    on_request(request) -> Response | None
    on_error(exc, request) -> Response | None
    on_response(request, response) -> Response | None

Every hook may be sync or async. A missing hook is a no-op; the
registry looks hooks up by name and never inspects the plugin's type.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from junction.routing.route import RouteConfig

HOOKS: tuple[str, ...] = (
    "on_init",
    "on_before_route_register",
    "on_after_route_register",
    "on_request",
    "on_error",
    "on_response",
)


class Plugin(Protocol):
    """Minimal plugin shape. Hooks are optional and looked up by name.

    Example::

        class Timing:
            name = "timing"

            def on_response(self, request, response):
                return response.with_header("X-Handled-By", "junction")
    """

    name: str


@dataclass(frozen=True, slots=True)
class RouteRewrite:
    """Replacement values returned from ``on_before_route_register``.

    Fields left as ``None`` keep the current value.
    """

    config: RouteConfig | None = None
    handler: Callable[..., Any] | None = None
