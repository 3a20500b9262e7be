"""The junction dispatcher.

Mutable during setup (routes, middleware, plugins, auth). Frozen when
the first request is dispatched.
"""

import logging
import threading

from junction._internal.types import ErrorHandler, Handler
from junction.auth.config import AuthConfig
from junction.auth.gate import AuthGate
from junction.config import DispatcherConfig
from junction.errors import ConfigurationError
from junction.http.request import Request
from junction.http.response import Response
from junction.middleware.chain import MiddlewareChain
from junction.middleware.protocol import Middleware
from junction.pipeline import Pipeline
from junction.plugins.protocol import Plugin
from junction.plugins.registry import PluginRegistry
from junction.routing.route import HTTP_METHODS, Route, RouteConfig, RouteMatch
from junction.routing.table import RouteTable
from junction.translator import ErrorTranslator

logger = logging.getLogger("junction.dispatcher")


class Dispatcher:
    """An in-process HTTP request dispatcher.

    Setup is async because plugin hooks may be::

        dispatcher = Dispatcher(auth=AuthConfig(verify=verify_token))
        await dispatcher.register_plugin(CORSPlugin(CORSConfig(allow_origins=("*",))))
        dispatcher.use(log_requests)

        async def show_user(ctx: RequestContext) -> Response:
            return json_response({"id": ctx.data.params["id"], "viewer": ctx.auth})

        await dispatcher.get("/users/:id", RouteConfig(auth=True), show_user)

        response = await dispatcher.dispatch(Request.build("GET", "/users/42"))

    Thread safety:
        Setup is single-threaded. The first ``dispatch()`` freezes the
        route table, middleware and plugins under a lock with a double
        check, so concurrent first requests compile exactly once. After
        that, every shared structure is read-only.
    """

    __slots__ = (
        "_auth",
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_pipeline",
        "_plugins",
        "_routes",
        "config",
    )

    def __init__(
        self,
        config: DispatcherConfig | None = None,
        *,
        auth: AuthConfig | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self.config: DispatcherConfig = config or DispatcherConfig()
        self._auth: AuthConfig | None = auth
        self._error_handler: ErrorHandler | None = on_error
        self._routes: RouteTable = RouteTable()
        self._middleware: MiddlewareChain = MiddlewareChain()
        self._plugins: PluginRegistry = PluginRegistry()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state: set during _freeze()
        self._pipeline: Pipeline | None = None

    # -- Route registration --

    async def add_route(
        self,
        method: str,
        path: str,
        config: RouteConfig | None,
        handler: Handler,
    ) -> Route:
        """Register *handler* for *method* and *path*.

        Runs every plugin's ``on_before_route_register`` (chained), stores
        the route, then runs ``on_after_route_register``. Returns the
        stored route once all hooks have finished.
        """
        self._check_not_frozen()
        method = method.upper()
        if method not in HTTP_METHODS:
            msg = f"Unsupported HTTP method {method!r}"
            raise ConfigurationError(msg)
        if not path.startswith("/"):
            msg = f"Route path must start with '/': {path!r}"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Route handler for {method} {path} must be callable, got {handler!r}"
            raise ConfigurationError(msg)

        config, handler = await self._plugins.rewrite_route(
            self, method, path, config or RouteConfig(), handler
        )
        route = Route(method=method, pattern=path, handler=handler, config=config)
        self._routes.add(route)
        logger.debug("Registered %s", route)

        await self._plugins.after_route_register(self, method, path, config)
        return route

    async def get(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("GET", path, config, handler)

    async def head(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("HEAD", path, config, handler)

    async def post(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("POST", path, config, handler)

    async def put(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("PUT", path, config, handler)

    async def patch(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("PATCH", path, config, handler)

    async def delete(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("DELETE", path, config, handler)

    async def options(self, path: str, config: RouteConfig | None, handler: Handler) -> Route:
        return await self.add_route("OPTIONS", path, config, handler)

    # -- Middleware --

    def use(self, middleware: Middleware, path: str | None = None) -> None:
        """Add a middleware, globally or for paths starting with *path*."""
        self._check_not_frozen()
        if not callable(middleware):
            msg = f"Middleware must be callable, got {middleware!r}"
            raise ConfigurationError(msg)
        self._middleware.add(middleware, path)

    # -- Plugins --

    async def register_plugin(self, plugin: Plugin) -> None:
        """Register *plugin* and run its ``on_init`` hook before returning."""
        self._check_not_frozen()
        await self._plugins.register(plugin, self)
        logger.debug("Registered plugin %r", plugin.name)

    # -- Auth and errors --

    def configure_auth(self, config: AuthConfig) -> None:
        """Set the global auth config used by routes declaring ``auth=True``.

        Routes resolve it when requests arrive, so routes registered earlier
        see it too. Only allowed during setup.
        """
        self._check_not_frozen()
        self._auth = config

    def error_handler(self, func: ErrorHandler) -> ErrorHandler:
        """Register the global error handler via decorator.

        It receives ``()``, ``(request)`` or ``(request, exc)`` and runs
        after plugin ``on_error`` hooks declined the error.
        """
        self._check_not_frozen()
        self._error_handler = func
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes.routes

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return self._plugins.plugins

    @property
    def auth_config(self) -> AuthConfig | None:
        return self._auth

    @property
    def frozen(self) -> bool:
        return self._frozen

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Look up the route for *method* and *path*; ``None`` when unmatched."""
        return self._routes.match(method, path)

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Run *request* through the pipeline and return the final response.

        Unmatched requests get a 404 JSON response; the caller needs no
        fallback of its own.
        """
        self._ensure_frozen()
        assert self._pipeline is not None
        return await self._pipeline.handle(request)

    async def __call__(self, request: Request) -> Response:
        return await self.dispatch(request)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile into the serving state.

        MUST only be called while holding _freeze_lock.
        """
        self._routes.compile()
        self._middleware.freeze()
        self._pipeline = Pipeline(
            routes=self._routes,
            middleware=self._middleware,
            plugins=self._plugins,
            auth=AuthGate(self._auth),
            translator=ErrorTranslator(
                self._plugins,
                error_handler=self._error_handler,
                config=self.config,
            ),
            config=self.config,
        )
        self._frozen = True
        logger.debug(
            "Dispatcher frozen: %d routes, %d middleware, %d plugins",
            len(self._routes),
            len(self._middleware),
            len(self._plugins),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the dispatcher after it has started serving requests. "
                "Register routes, middleware, plugins and auth before the first dispatch()."
            )
            raise RuntimeError(msg)
