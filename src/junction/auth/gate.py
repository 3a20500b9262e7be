"""Auth gate — decide, verify, attach.

Per-route state machine::

    skip                         (route declares no auth)
    required -> verifying -> authenticated   (payload attached)
                          -> verify_failed   (mapper / 401 response)
             -> misconfigured                (500 response)

Config resolution:

- a route-level ``AuthConfig`` is used in full, borrowing only the
  global ``on_error`` mapper when it has none of its own;
- ``auth=True`` means "use the global config", and is misconfigured
  when no global config exists.
"""

import enum
import logging
from dataclasses import dataclass

from junction._internal.invoke import invoke
from junction.auth.config import AuthConfig, RouteAuth
from junction.context import RequestContext
from junction.errors import AuthMisconfigured, ConfigurationError
from junction.http.response import Response, error_response

logger = logging.getLogger("junction.auth")


class AuthState(enum.Enum):
    SKIPPED = "skipped"
    AUTHENTICATED = "authenticated"
    VERIFY_FAILED = "verify_failed"
    MISCONFIGURED = "misconfigured"


@dataclass(frozen=True, slots=True)
class AuthOutcome:
    """Where a request ended up in the auth state machine.

    ``context`` carries the payload when authenticated. ``response`` is
    the terminal response for the two failure states.
    """

    state: AuthState
    context: RequestContext
    response: Response | None = None

    @property
    def proceed(self) -> bool:
        return self.response is None


class AuthGate:
    """Authenticates requests for routes that declare ``auth``.

    Holds the dispatcher's global config. The dispatcher builds one gate
    when it starts serving, so the global config cannot change under
    requests already in flight.
    """

    __slots__ = ("_global",)

    def __init__(self, global_config: AuthConfig | None = None) -> None:
        self._global = global_config

    @property
    def global_config(self) -> AuthConfig | None:
        return self._global

    def resolve(self, route_auth: RouteAuth) -> AuthConfig | None:
        """Return the effective config for a route, or ``None`` to skip.

        Raises ``AuthMisconfigured`` when auth is required but no config
        applies at any scope.
        """
        if route_auth is None or route_auth is False:
            return None
        if isinstance(route_auth, AuthConfig):
            if route_auth.on_error is None and self._global is not None:
                return AuthConfig(verify=route_auth.verify, on_error=self._global.on_error)
            return route_auth
        if route_auth is True:
            if self._global is None:
                msg = "Authentication is required but no auth config was provided"
                raise AuthMisconfigured(msg)
            return self._global
        msg = f"Route auth must be a bool or AuthConfig, got {route_auth!r}"
        raise ConfigurationError(msg)

    async def authenticate(self, ctx: RequestContext, route_auth: RouteAuth) -> AuthOutcome:
        """Run the verify step for *ctx* and report the resulting state."""
        try:
            config = self.resolve(route_auth)
        except AuthMisconfigured as exc:
            logger.error("Auth misconfigured for %s %s: %s", ctx.method, ctx.path, exc)
            return AuthOutcome(
                AuthState.MISCONFIGURED,
                ctx,
                error_response(
                    "Authentication configuration error",
                    500,
                    message=str(exc),
                ),
            )

        if config is None:
            return AuthOutcome(AuthState.SKIPPED, ctx)

        try:
            payload = await invoke(config.verify, ctx.request)
        except Exception as exc:  # noqa: BLE001 -- any raise is a verify failure
            logger.debug("Auth failed for %s %s: %s", ctx.method, ctx.path, exc)
            response = await failure_response(config, exc)
            return AuthOutcome(AuthState.VERIFY_FAILED, ctx, response)

        return AuthOutcome(AuthState.AUTHENTICATED, ctx.with_auth(payload))


async def failure_response(config: AuthConfig, exc: Exception) -> Response:
    """Map a verify failure through ``config.on_error``, else a 401.

    A mapper that returns ``None`` declines and the default 401 is used.
    Any other non-``Response`` value is a programming error.
    """
    if config.on_error is not None:
        mapped = await invoke(config.on_error, exc)
        if isinstance(mapped, Response):
            return mapped
        if mapped is not None:
            msg = (
                f"Auth error mapper {config.on_error!r} returned {type(mapped).__name__}, "
                "expected Response or None"
            )
            raise TypeError(msg)
    return error_response("Authentication failed", 401, message=str(exc) or "Unauthorized")

