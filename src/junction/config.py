"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(debug=True, default_content_type="text/plain")
    """

    # Include exception type names in default 500 bodies
    debug: bool = False

    # Applied to responses that did not set a content type explicitly
    default_content_type: str = "application/json"

    # Default response bodies
    not_found_message: str = "Not Found"
    error_fallback_message: str = "An unexpected error occurred."

    # Run synchronous handlers in an anyio worker thread
    offload_sync: bool = False
