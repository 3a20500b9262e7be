"""Junction — an in-process HTTP request dispatcher.

Matches requests to handlers by method and path pattern, runs them
through middleware, plugins, authentication and validation, and turns
every failure into a structured response. No sockets involved: hand it
a parsed ``Request``, get a ``Response`` back.

Basic usage::

    from junction import Dispatcher, Request, RouteConfig, json_response

    dispatcher = Dispatcher()

    async def show_user(ctx):
        return json_response({"id": ctx.data.params["id"]})

    await dispatcher.get("/users/:id", RouteConfig(), show_user)
    response = await dispatcher.dispatch(Request.build("GET", "/users/42"))
"""

__version__ = "0.1.0"
__all__ = [
    "AuthConfig",
    "AuthPlugin",
    "CORSConfig",
    "CORSPlugin",
    "ConfigurationError",
    "Dispatcher",
    "DispatcherConfig",
    "ErrorHandlingPlugin",
    "HTTPError",
    "JunctionError",
    "Middleware",
    "NotFound",
    "Plugin",
    "Request",
    "RequestContext",
    "Response",
    "RouteConfig",
    "RouteRewrite",
    "ValidatedData",
    "ValidationFailed",
    "ValidationSchema",
    "auth_middleware",
    "error_response",
    "json_response",
    "match_path",
]

# name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AuthConfig": "junction.auth.config",
    "AuthPlugin": "junction.plugins.auth",
    "CORSConfig": "junction.plugins.cors",
    "CORSPlugin": "junction.plugins.cors",
    "ConfigurationError": "junction.errors",
    "Dispatcher": "junction.dispatcher",
    "DispatcherConfig": "junction.config",
    "ErrorHandlingPlugin": "junction.plugins.errors",
    "HTTPError": "junction.errors",
    "JunctionError": "junction.errors",
    "Middleware": "junction.middleware.protocol",
    "NotFound": "junction.errors",
    "Plugin": "junction.plugins.protocol",
    "Request": "junction.http.request",
    "RequestContext": "junction.context",
    "Response": "junction.http.response",
    "RouteConfig": "junction.routing.route",
    "RouteRewrite": "junction.plugins.protocol",
    "ValidatedData": "junction.validation.result",
    "ValidationFailed": "junction.errors",
    "ValidationSchema": "junction.validation.schema",
    "auth_middleware": "junction.auth.middleware",
    "error_response": "junction.http.response",
    "json_response": "junction.http.response",
    "match_path": "junction.routing.matcher",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import junction`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
