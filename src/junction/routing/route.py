"""Route, RouteConfig and RouteMatch frozen dataclasses."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from junction._internal.types import Handler
from junction.auth.config import AuthConfig, RouteAuth
from junction.errors import ConfigurationError
from junction.validation.schema import ValidationSchema

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}
)


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Per-route options declared at registration.

    Attributes:
        validation: Facet validators; ``None`` passes every facet through.
        middleware: Route-level middleware, run after path matching.
        auth: ``None``/``False`` to skip, ``True`` for the global config,
            or a route-specific ``AuthConfig``.
    """

    validation: ValidationSchema | None = None
    middleware: Sequence[Any] = field(default=())
    auth: RouteAuth = None

    def __post_init__(self) -> None:
        middleware = tuple(self.middleware or ())
        for mw in middleware:
            if not callable(mw):
                msg = f"Route middleware must be callable, got {mw!r}"
                raise ConfigurationError(msg)
        # Frozen dataclass: normalize in place once, before anyone can see it
        object.__setattr__(self, "middleware", middleware)

        if self.validation is not None and not isinstance(self.validation, ValidationSchema):
            msg = f"RouteConfig.validation must be a ValidationSchema, got {self.validation!r}"
            raise ConfigurationError(msg)
        if self.auth is not None and not isinstance(self.auth, bool | AuthConfig):
            msg = f"RouteConfig.auth must be a bool or AuthConfig, got {self.auth!r}"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Created once at registration, never modified.

    ``handler`` and ``config`` are the values left after every plugin's
    ``on_before_route_register`` rewrite.
    """

    method: str
    pattern: str
    handler: Handler
    config: RouteConfig = field(default_factory=RouteConfig)

    @property
    def middleware(self) -> tuple[Any, ...]:
        return tuple(self.config.middleware)

    def __str__(self) -> str:
        return f"{self.method} {self.pattern}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    path_params: dict[str, str]
