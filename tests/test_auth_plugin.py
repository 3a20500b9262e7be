"""Tests for junction.plugins.auth — route auth applied by handler rewriting."""

from junction.auth.config import AuthConfig
from junction.context import RequestContext
from junction.dispatcher import Dispatcher
from junction.http.request import Request
from junction.http.response import Response, json_response
from junction.plugins import AuthPlugin
from junction.routing.route import RouteConfig
from junction.testing import TestClient
from junction.validation.schema import ValidationSchema


def verify_token(request: Request) -> dict[str, str]:
    if request.headers.get("authorization") != "Bearer valid-token":
        raise PermissionError("Invalid token")
    return {"user_id": "123"}


def custom_error(exc: Exception) -> Response:
    return Response(body="Custom error response", status=401, content_type="text/plain")


async def whoami(ctx: RequestContext) -> Response:
    return json_response({"auth": ctx.auth})


def require_page(query):
    if "page" not in query:
        raise ValueError("page is required")
    return {"page": int(query["page"])}


async def _dispatcher(config: AuthConfig | None) -> Dispatcher:
    dispatcher = Dispatcher()
    await dispatcher.register_plugin(AuthPlugin(config))
    return dispatcher


class TestAuthPlugin:
    async def test_authenticates_and_attaches_payload(self) -> None:
        dispatcher = await _dispatcher(AuthConfig(verify=verify_token))
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)

        response = await TestClient(dispatcher).get(
            "/protected", headers={"Authorization": "Bearer valid-token"}
        )
        assert response.status == 200
        assert response.json() == {"auth": {"user_id": "123"}}

    async def test_failure_goes_through_error_mapper(self) -> None:
        dispatcher = await _dispatcher(AuthConfig(verify=verify_token, on_error=custom_error))
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)

        response = await TestClient(dispatcher).get(
            "/protected", headers={"Authorization": "Bearer invalid-token"}
        )
        assert response.status == 401
        assert response.text == "Custom error response"

    async def test_failure_without_mapper_is_json_401(self) -> None:
        dispatcher = await _dispatcher(AuthConfig(verify=verify_token))
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)

        response = await TestClient(dispatcher).get("/protected")
        assert response.status == 401
        assert response.json() == {"error": "Authentication failed", "message": "Invalid token"}

    async def test_routes_without_auth_bypass_verify(self) -> None:
        calls = []

        def counting_verify(request):
            calls.append(request.path)
            return {"user_id": "123"}

        dispatcher = await _dispatcher(AuthConfig(verify=counting_verify))
        await dispatcher.get("/public", None, lambda ctx: {"message": "Public route"})

        response = await TestClient(dispatcher).get("/public")
        assert response.status == 200
        assert response.json() == {"message": "Public route"}
        assert calls == []

    async def test_missing_config_is_500(self) -> None:
        dispatcher = await _dispatcher(None)
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)

        response = await TestClient(dispatcher).get("/protected")
        assert response.status == 500
        assert response.json()["error"] == "Authentication configuration error"

    async def test_configure_auth_applies_to_registered_routes(self) -> None:
        plugin = AuthPlugin()
        dispatcher = Dispatcher()
        await dispatcher.register_plugin(plugin)
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)
        plugin.configure_auth(AuthConfig(verify=verify_token))

        response = await TestClient(dispatcher).get(
            "/protected", headers={"Authorization": "Bearer valid-token"}
        )
        assert response.status == 200

    async def test_verify_runs_once_per_request(self) -> None:
        calls = []

        def counting_verify(request):
            calls.append(request.path)
            return "ok"

        dispatcher = Dispatcher()
        dispatcher.configure_auth(AuthConfig(verify=counting_verify))
        await dispatcher.register_plugin(AuthPlugin(AuthConfig(verify=counting_verify)))
        await dispatcher.get("/protected", RouteConfig(auth=True), whoami)

        response = await TestClient(dispatcher).get("/protected")
        assert response.json() == {"auth": "ok"}
        assert calls == ["/protected"]

    async def test_rewritten_route_drops_auth_and_validation(self) -> None:
        dispatcher = await _dispatcher(AuthConfig(verify=verify_token))
        route = await dispatcher.get(
            "/items",
            RouteConfig(auth=True, validation=ValidationSchema(query=require_page)),
            whoami,
        )
        assert route.config.auth is None
        assert route.config.validation is None
        assert route.handler is not whoami


class TestAuthPluginValidation:
    async def _client(self) -> TestClient:
        async def items(ctx):
            return {"page": ctx.data.query["page"], "auth": ctx.auth}

        dispatcher = await _dispatcher(AuthConfig(verify=verify_token))
        await dispatcher.get(
            "/items",
            RouteConfig(auth=True, validation=ValidationSchema(query=require_page)),
            items,
        )
        return TestClient(dispatcher)

    async def test_validated_data_reaches_handler(self) -> None:
        client = await self._client()
        response = await client.get(
            "/items?page=3", headers={"Authorization": "Bearer valid-token"}
        )
        assert response.json() == {"page": 3, "auth": {"user_id": "123"}}

    async def test_validation_failure_is_400(self) -> None:
        client = await self._client()
        response = await client.get("/items", headers={"Authorization": "Bearer valid-token"})
        assert response.status == 400
        assert response.json()["details"] == [{"type": "query", "messages": ["page is required"]}]

    async def test_auth_runs_before_validation(self) -> None:
        client = await self._client()
        response = await client.get("/items")
        assert response.status == 401
