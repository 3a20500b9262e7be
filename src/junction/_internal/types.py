"""Shared type aliases used across junction modules."""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

# Route handler: receives a RequestContext, returns a Response (sync or async)
Handler: TypeAlias = Callable[..., Any]

# Global error handler: receives (request, exc)? and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]

# Auth verify step: receives a Request, returns an auth payload or raises
Verifier: TypeAlias = Callable[..., Any]

# ASGI-shaped receive callable used to stream a request body
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
