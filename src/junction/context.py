"""Per-request context passed to middleware and handlers.

The request itself is frozen. Everything the pipeline learns about it
(path parameters, the authenticated payload, validated data) travels in
a derived ``RequestContext`` instead. Attaching returns a new context;
earlier stages keep seeing the value they were given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from junction.http.request import Request

if TYPE_CHECKING:
    from junction.routing.route import Route
    from junction.validation.result import ValidatedData


@dataclass(frozen=True, slots=True)
class RequestContext:
    """A request plus what the pipeline has attached to it so far.

    Attributes:
        request: The inbound request, never mutated.
        path_params: Raw path parameters bound by the matched route
            (empty before matching).
        route: The matched route, or ``None`` before matching.
        auth: Payload returned by the verify step, when auth ran.
        data: Validated facets, set right before the handler runs.
    """

    request: Request
    path_params: dict[str, str] = field(default_factory=dict)
    route: Route | None = None
    auth: Any = None
    data: ValidatedData | None = None

    # -- Shortcuts --

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    @property
    def is_authenticated(self) -> bool:
        return self.auth is not None

    # -- Derivation --

    def with_match(self, route: Route, path_params: dict[str, str]) -> RequestContext:
        return replace(self, route=route, path_params=dict(path_params))

    def with_auth(self, payload: Any) -> RequestContext:
        return replace(self, auth=payload)

    def with_data(self, data: ValidatedData) -> RequestContext:
        return replace(self, data=data)
