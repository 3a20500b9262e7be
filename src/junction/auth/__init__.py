"""Authentication — global and per-route verify steps.

Routes opt in through ``RouteConfig(auth=...)``:

- ``auth=True`` uses the dispatcher's global ``AuthConfig``
- ``auth=AuthConfig(...)`` uses that config's verify step instead
- ``auth=None`` / ``False`` (default) skips authentication

On success the verify step's return value is available to the handler
as ``ctx.auth``.
"""

from junction.auth.config import AuthConfig, RouteAuth
from junction.auth.gate import AuthGate, AuthOutcome, AuthState, failure_response
from junction.auth.middleware import auth_middleware

__all__ = [
    "AuthConfig",
    "AuthGate",
    "AuthOutcome",
    "AuthState",
    "RouteAuth",
    "auth_middleware",
    "failure_response",
]
