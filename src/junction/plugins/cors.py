"""CORS plugin.

Answers preflight requests and adds CORS headers to responses for
allowed origins. Installs its preflight handler as global middleware
from ``on_init``, so preflights never reach routing.

Usage::

    await dispatcher.register_plugin(CORSPlugin(CORSConfig(
        allow_origins=("https://example.com",),
        allow_methods=("GET", "POST", "PUT"),
        allow_headers=("Content-Type", "Authorization"),
    )))
"""

from dataclasses import dataclass
from typing import Any

from junction.context import RequestContext
from junction.http.request import Request
from junction.http.response import Response


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    All fields have secure defaults (nothing is allowed).
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes


class CORSPlugin:
    """Standards-compliant CORS handling as a dispatcher plugin.

    Handles:
    - Preflight ``OPTIONS`` requests (204 with CORS headers)
    - Actual requests (CORS headers added in ``on_response``)
    - Credentials and wildcard origins (``"*"`` only without credentials)
    """

    name = "cors"

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")

        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )
        return response

    def _preflight_response(self, origin: str) -> Response:
        cfg = self.config
        response = Response(body="", status=204, content_type="text/plain; charset=utf-8")
        response = self._add_cors_headers(response, origin)
        response = response.with_header(
            "Access-Control-Allow-Methods", ", ".join(cfg.allow_methods)
        )
        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(cfg.allow_headers),
            )
        return response.with_header("Access-Control-Max-Age", str(cfg.max_age))

    # -- Hooks --

    def on_init(self, dispatcher: Any) -> None:
        dispatcher.use(self.preflight)

    def preflight(self, ctx: RequestContext) -> Response | None:
        """Global middleware: answer ``OPTIONS`` requests from allowed origins."""
        origin = ctx.request.headers.get("origin")
        if ctx.method != "OPTIONS" or origin is None or not self._is_allowed_origin(origin):
            return None
        return self._preflight_response(origin)

    def on_response(self, request: Request, response: Response) -> Response | None:
        origin = request.headers.get("origin")
        if origin is None or not self._is_allowed_origin(origin):
            return None
        if response.header("Access-Control-Allow-Origin") is not None:
            return None
        return self._add_cors_headers(response, origin)
