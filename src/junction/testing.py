"""Async test client for junction dispatchers.

Builds the same ``Request`` type the dispatcher receives in production
and returns the same ``Response``. No transport involved.
"""

import json as json_module
from typing import Any
from urllib.parse import urlencode

from junction.dispatcher import Dispatcher
from junction.http.request import Request
from junction.http.response import Response


class TestClient:
    """Async test client for a junction ``Dispatcher``.

    Usage::

        client = TestClient(dispatcher)
        response = await client.get("/users/42", headers={"Authorization": "Bearer t"})
        assert response.status == 200

        response = await client.post("/users", json={"name": "alice"})
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
        query: dict[str, str] | None = None,
    ) -> Response:
        """Build a request and dispatch it."""
        merged: dict[str, str] = {}
        request_body: bytes | str = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            merged["content-type"] = "application/json"
        merged.update(headers or {})

        if query:
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{urlencode(query)}"

        request = Request.build(method, path, headers=merged, body=request_body)
        return await self.dispatcher.dispatch(request)

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers, query=query)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PATCH request."""
        return await self.request("PATCH", path, headers=headers, body=body, json=json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def options(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, headers=headers)
