"""Immutable HTTP request.

Frozen metadata with async, cached body access. The request is honest
about what it is: received data that doesn't change. The body is read
from the transport at most once; every later reader (validation, an auth
verify step, the handler) gets the same cached bytes.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from junction._internal.types import Receive
from junction.http.headers import Headers
from junction.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable, already-parsed HTTP request.

    ``path`` never contains the query string; query parameters live in
    ``query``. Body is accessed asynchronously via ``.body()``,
    ``.text()`` and ``.json()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: ASGI-shaped receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for the body bytes
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request target (path + query string)."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the receive callable is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self._stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def _stream(self) -> AsyncGenerator[bytes]:
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: bytes | str = b"",
        client: tuple[str, int] | None = None,
    ) -> Request:
        """Create a Request from a method, a URL or path, and an in-memory body.

        Absolute URLs are accepted; only their path and query are kept.
        Anything else is a request target, so ``"//users/1"`` stays a path::

            Request.build("GET", "/users/42?expand=1")
            Request.build("POST", "https://api.test/users", body=b'{"name": "a"}')
        """
        if "://" in url:
            parts = urlsplit(url)
            path, query = parts.path, parts.query
        else:
            path, _, query = url.partition("#")[0].partition("?")
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method.upper(),
            path=path or "/",
            headers=Headers.from_pairs(headers or {}),
            query=QueryParams(query),
            client=client,
            _cache={"_body": body},
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable.

        Only parses the scope; the body is pulled from *receive* lazily.
        The undecoded ``raw_path`` is preferred when the server sends it,
        so an encoded ``%2F`` stays inside its path segment.
        """
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=raw_path.decode("latin-1") if raw_path else scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
