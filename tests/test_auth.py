"""Tests for junction.auth — config resolution, the auth gate, and auth middleware."""

import pytest

from junction.auth import AuthConfig, AuthGate, AuthState, auth_middleware
from junction.context import RequestContext
from junction.errors import AuthMisconfigured, ConfigurationError
from junction.http.request import Request
from junction.http.response import Response, json_response


def _ctx(headers: dict[str, str] | None = None) -> RequestContext:
    return RequestContext(request=Request.build("GET", "/me", headers=headers))


def verify_bearer(request: Request) -> dict[str, str]:
    token = request.headers.get("authorization", "")
    if token != "Bearer good":
        raise PermissionError("Invalid token")
    return {"user": "alice"}


async def verify_admin(request: Request) -> dict[str, str]:
    if request.headers.get("x-admin") != "yes":
        raise PermissionError("Admins only")
    return {"user": "root"}


def teapot(exc: Exception) -> Response:
    return json_response({"denied": str(exc)}, status=418)


class TestAuthConfig:
    def test_verify_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="verify"):
            AuthConfig(verify="nope")  # type: ignore[arg-type]

    def test_on_error_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="on_error"):
            AuthConfig(verify=verify_bearer, on_error=123)  # type: ignore[arg-type]


class TestResolve:
    def test_no_auth_skips(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer))
        assert gate.resolve(None) is None
        assert gate.resolve(False) is None

    def test_true_uses_global(self) -> None:
        global_cfg = AuthConfig(verify=verify_bearer)
        assert AuthGate(global_cfg).resolve(True) is global_cfg

    def test_true_without_global_is_misconfigured(self) -> None:
        with pytest.raises(AuthMisconfigured):
            AuthGate(None).resolve(True)

    def test_route_config_overrides_global_verify(self) -> None:
        route_cfg = AuthConfig(verify=verify_admin, on_error=teapot)
        gate = AuthGate(AuthConfig(verify=verify_bearer))
        assert gate.resolve(route_cfg) is route_cfg

    def test_route_config_borrows_global_mapper(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer, on_error=teapot))
        resolved = gate.resolve(AuthConfig(verify=verify_admin))
        assert resolved is not None
        assert resolved.verify is verify_admin
        assert resolved.on_error is teapot

    def test_route_config_without_global(self) -> None:
        route_cfg = AuthConfig(verify=verify_admin)
        assert AuthGate(None).resolve(route_cfg) is route_cfg


class TestAuthenticate:
    async def test_skipped(self) -> None:
        ctx = _ctx()
        outcome = await AuthGate(None).authenticate(ctx, None)
        assert outcome.state is AuthState.SKIPPED
        assert outcome.proceed
        assert outcome.context is ctx

    async def test_authenticated_attaches_payload(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer))
        ctx = _ctx({"Authorization": "Bearer good"})
        outcome = await gate.authenticate(ctx, True)
        assert outcome.state is AuthState.AUTHENTICATED
        assert outcome.context.auth == {"user": "alice"}
        assert outcome.context.is_authenticated
        # The original context is untouched
        assert ctx.auth is None

    async def test_async_verify(self) -> None:
        gate = AuthGate(None)
        outcome = await gate.authenticate(_ctx({"X-Admin": "yes"}), AuthConfig(verify=verify_admin))
        assert outcome.context.auth == {"user": "root"}

    async def test_failure_default_401(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer))
        outcome = await gate.authenticate(_ctx({"Authorization": "Bearer bad"}), True)
        assert outcome.state is AuthState.VERIFY_FAILED
        assert not outcome.proceed
        assert outcome.response is not None
        assert outcome.response.status == 401
        assert outcome.response.json() == {
            "error": "Authentication failed",
            "message": "Invalid token",
        }

    async def test_failure_uses_mapper(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer, on_error=teapot))
        outcome = await gate.authenticate(_ctx(), True)
        assert outcome.response is not None
        assert outcome.response.status == 418
        assert outcome.response.json() == {"denied": "Invalid token"}

    async def test_route_failure_falls_back_to_global_mapper(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer, on_error=teapot))
        outcome = await gate.authenticate(_ctx(), AuthConfig(verify=verify_admin))
        assert outcome.response is not None
        assert outcome.response.status == 418
        assert outcome.response.json() == {"denied": "Admins only"}

    async def test_mapper_returning_none_falls_back_to_401(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer, on_error=lambda exc: None))
        outcome = await gate.authenticate(_ctx(), True)
        assert outcome.response is not None
        assert outcome.response.status == 401

    async def test_mapper_returning_non_response_raises(self) -> None:
        gate = AuthGate(AuthConfig(verify=verify_bearer, on_error=lambda exc: "denied"))
        with pytest.raises(TypeError, match="returned str, expected Response or None"):
            await gate.authenticate(_ctx(), True)

    async def test_misconfigured_500(self) -> None:
        outcome = await AuthGate(None).authenticate(_ctx(), True)
        assert outcome.state is AuthState.MISCONFIGURED
        assert outcome.response is not None
        assert outcome.response.status == 500
        body = outcome.response.json()
        assert body["error"] == "Authentication configuration error"
        assert "no auth config" in body["message"]


class TestAuthMiddleware:
    async def test_passes_valid_requests(self) -> None:
        mw = auth_middleware(AuthConfig(verify=verify_bearer))
        assert await mw(_ctx({"Authorization": "Bearer good"})) is None

    async def test_rejects_with_plain_401(self) -> None:
        mw = auth_middleware(AuthConfig(verify=verify_bearer))
        response = await mw(_ctx())
        assert response is not None
        assert response.status == 401
        assert response.text == "Unauthorized"
        assert response.content_type == "text/plain; charset=utf-8"

    async def test_rejects_through_mapper(self) -> None:
        mw = auth_middleware(AuthConfig(verify=verify_admin, on_error=teapot))
        response = await mw(_ctx())
        assert response is not None
        assert response.status == 418

    async def test_mapper_returning_none_falls_back_to_401(self) -> None:
        mw = auth_middleware(AuthConfig(verify=verify_bearer, on_error=lambda exc: None))
        response = await mw(_ctx())
        assert response is not None
        assert response.status == 401

    async def test_mapper_returning_non_response_raises(self) -> None:
        mw = auth_middleware(AuthConfig(verify=verify_bearer, on_error=lambda exc: {"no": 1}))
        with pytest.raises(TypeError, match="expected Response or None"):
            await mw(_ctx())
