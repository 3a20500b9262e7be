"""Junction exception hierarchy.

Shared across the route table, validation, auth, and the dispatcher so
every module raises and catches the same types.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


class JunctionError(Exception):
    """Base for all junction-specific errors."""


class ConfigurationError(JunctionError):
    """Raised when a registration or setup value is invalid.

    Typically raised while routes, plugins, or auth are being configured,
    before the dispatcher starts serving.
    """


class AuthMisconfigured(ConfigurationError):
    """A route requires authentication but no auth config applies.

    Recovered locally by the auth gate into a 500 response. Never reaches
    the error translator.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(JunctionError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or middleware. The error translator renders it as
    a JSON body with the status preserved::

        raise HTTPError(409, "Email already registered", code="CONFLICT")
    """

    status: int = 500
    detail: str = ""
    code: str = "INTERNAL_ERROR"
    details: Any = None
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 -- conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail, code="NOT_FOUND")


@dataclass(frozen=True, slots=True)
class FacetError:
    """Failure messages for one validated part of a request."""

    type: str
    messages: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "messages": list(self.messages)}


class ValidationFailed(JunctionError):  # noqa: N818
    """One or more request facets failed validation.

    Carries every failing facet in check order (params, query, headers,
    body), never just the first.
    """

    def __init__(self, errors: Sequence[FacetError]) -> None:
        super().__init__("Validation failed")
        self.errors: tuple[FacetError, ...] = tuple(errors)

    @property
    def facets(self) -> tuple[str, ...]:
        return tuple(e.type for e in self.errors)

    def to_details(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self.errors]
