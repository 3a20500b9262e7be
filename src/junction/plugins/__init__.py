"""Plugins — optional lifecycle hooks around registration and dispatch.

Bundled plugins:
    AuthPlugin -- Route auth applied by wrapping handlers at registration
    CORSPlugin -- Preflight answers and CORS response headers
    ErrorHandlingPlugin -- Structured JSON for unexpected exceptions
"""

from junction.plugins.auth import AuthPlugin
from junction.plugins.cors import CORSConfig, CORSPlugin
from junction.plugins.errors import ErrorHandlingPlugin
from junction.plugins.protocol import HOOKS, Plugin, RouteRewrite
from junction.plugins.registry import PluginRegistry

__all__ = [
    "HOOKS",
    "AuthPlugin",
    "CORSConfig",
    "CORSPlugin",
    "ErrorHandlingPlugin",
    "Plugin",
    "PluginRegistry",
    "RouteRewrite",
]
