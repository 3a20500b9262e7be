"""Authentication configuration."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from junction._internal.types import Verifier
from junction.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """How to authenticate a request.

    Attributes:
        verify: ``(request) -> payload``, sync or async. Raising means the
            request is not authenticated; anything returned is the payload
            attached to the request context.
        on_error: Optional ``(exc) -> Response`` mapper for verify
            failures. When omitted, a route-level config falls back to the
            global mapper, and the global config to a 401 JSON response.

    Usage::

        async def verify(request):
            token = request.headers.get("authorization", "")
            user = await users.by_token(token.removeprefix("Bearer "))
            if user is None:
                raise PermissionError("Invalid token")
            return user

        dispatcher.configure_auth(AuthConfig(verify=verify))
    """

    verify: Verifier
    on_error: Callable[[Exception], Any] | None = None

    def __post_init__(self) -> None:
        if not callable(self.verify):
            msg = f"AuthConfig.verify must be callable, got {self.verify!r}"
            raise ConfigurationError(msg)
        if self.on_error is not None and not callable(self.on_error):
            msg = f"AuthConfig.on_error must be callable, got {self.on_error!r}"
            raise ConfigurationError(msg)


RouteAuth: TypeAlias = bool | AuthConfig | None
