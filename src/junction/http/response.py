"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.

JSON helpers build the structured bodies junction uses for every
error::

    return json_response({"id": 42}, status=201)
    return error_response("Not found", 404)
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``content_type`` is ``None`` until someone sets it explicitly. The
    dispatcher fills in its configured default only in that case, so a
    handler returning ``text/plain`` keeps it.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | Sequence[tuple[str, str]]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items()) if isinstance(headers, Mapping) else tuple(headers)
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Readers --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the last value set for *name* (case-insensitive)."""
        name_lower = name.lower()
        if name_lower == "content-type" and self.content_type is not None:
            return self.content_type
        for hname, hvalue in reversed(self.headers):
            if hname.lower() == name_lower:
                return hvalue
        return default

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.text)


def json_response(
    data: Any,
    *,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Encode *data* as a JSON response. ``None`` encodes as ``null``."""
    response = Response(
        body=json_module.dumps(data),
        status=status,
        content_type=JSON_CONTENT_TYPE,
    )
    if headers:
        response = response.with_headers(headers)
    return response


def error_response(
    message: str,
    status: int = 400,
    *,
    details: Any = None,
    headers: Mapping[str, str] | None = None,
    **extra: Any,
) -> Response:
    """Build the structured error body: ``{"error": message, "details"?, ...}``."""
    payload: dict[str, Any] = {"error": message}
    if details is not None:
        payload["details"] = details
    payload.update(extra)
    return json_response(payload, status=status, headers=headers)
