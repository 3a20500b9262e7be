"""Tests for junction.http.request — frozen Request with cached body."""

import dataclasses

import pytest

from junction.http.request import Request


def _receiver(*chunks: bytes):
    """Build an ASGI-shaped receive callable that yields *chunks* and counts calls."""
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]
    calls = {"count": 0}

    async def receive():
        calls["count"] += 1
        if messages:
            return messages.pop(0)
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive, calls


class TestBuild:
    def test_method_upper_cased(self) -> None:
        request = Request.build("get", "/users")
        assert request.method == "GET"

    def test_path_and_query_split(self) -> None:
        request = Request.build("GET", "/users/42?expand=1&tag=a")
        assert request.path == "/users/42"
        assert request.query["expand"] == "1"
        assert request.query.raw == "expand=1&tag=a"

    def test_absolute_url(self) -> None:
        request = Request.build("GET", "https://api.test/users?x=1")
        assert request.path == "/users"
        assert request.query["x"] == "1"

    def test_empty_path_becomes_root(self) -> None:
        assert Request.build("GET", "https://api.test").path == "/"

    def test_double_slash_target_stays_a_path(self) -> None:
        request = Request.build("GET", "//users/1?x=1")
        assert request.path == "//users/1"
        assert request.query["x"] == "1"

    def test_fragment_dropped(self) -> None:
        request = Request.build("GET", "/docs?page=2#intro")
        assert request.path == "/docs"
        assert request.query["page"] == "2"

    def test_headers(self) -> None:
        request = Request.build("GET", "/", headers={"Content-Type": "application/json"})
        assert request.headers["content-type"] == "application/json"
        assert request.content_type == "application/json"

    def test_url_property(self) -> None:
        assert Request.build("GET", "/a?b=1").url == "/a?b=1"
        assert Request.build("GET", "/a").url == "/a"

    def test_frozen(self) -> None:
        request = Request.build("GET", "/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/other"  # type: ignore[misc]


class TestBody:
    async def test_bytes_body(self) -> None:
        request = Request.build("POST", "/", body=b"raw")
        assert await request.body() == b"raw"

    async def test_str_body_encoded(self) -> None:
        request = Request.build("POST", "/", body="héllo")
        assert await request.body() == "héllo".encode()
        assert await request.text() == "héllo"

    async def test_json(self) -> None:
        request = Request.build("POST", "/", body=b'{"name": "alice"}')
        assert await request.json() == {"name": "alice"}

    async def test_empty_body(self) -> None:
        request = Request.build("GET", "/")
        assert await request.body() == b""


class TestFromASGI:
    def _scope(self, **overrides):
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/users",
            "query_string": b"page=2",
            "headers": [(b"content-type", b"application/json")],
            "http_version": "2",
            "client": ["127.0.0.1", 5000],
        }
        scope.update(overrides)
        return scope

    async def test_parses_scope(self) -> None:
        receive, _ = _receiver(b"")
        request = Request.from_asgi(self._scope(), receive)
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.query["page"] == "2"
        assert request.content_type == "application/json"
        assert request.http_version == "2"
        assert request.client == ("127.0.0.1", 5000)

    async def test_streams_chunked_body(self) -> None:
        receive, _ = _receiver(b'{"a":', b" 1}")
        request = Request.from_asgi(self._scope(), receive)
        assert await request.json() == {"a": 1}

    async def test_body_read_once(self) -> None:
        receive, calls = _receiver(b"payload")
        request = Request.from_asgi(self._scope(), receive)
        assert await request.body() == b"payload"
        assert await request.body() == b"payload"
        assert await request.text() == "payload"
        assert calls["count"] == 1

    async def test_missing_optional_keys(self) -> None:
        receive, _ = _receiver(b"")
        request = Request.from_asgi({"method": "GET", "path": "/"}, receive)
        assert request.client is None
        assert len(request.headers) == 0
        assert len(request.query) == 0

    async def test_prefers_raw_path(self) -> None:
        receive, _ = _receiver(b"")
        scope = self._scope(path="/files/a/b", raw_path=b"/files/a%2Fb")
        assert Request.from_asgi(scope, receive).path == "/files/a%2Fb"

    async def test_empty_raw_path_falls_back_to_path(self) -> None:
        receive, _ = _receiver(b"")
        assert Request.from_asgi(self._scope(raw_path=b""), receive).path == "/users"
