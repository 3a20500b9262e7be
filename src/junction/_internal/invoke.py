"""Invoke helpers — call sync or async callables uniformly.

Handlers, middleware, plugin hooks, validators and verify steps can all
be ``def`` or ``async def``. Any code that calls a user-provided callable
goes through this module so the sync/async check lives in one place.

Usage::

    from junction._internal.invoke import invoke

    result = await invoke(handler, ctx)
"""

import functools
import inspect
from typing import Any

import anyio


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_offloaded(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Like ``invoke``, but run synchronous callables in a worker thread.

    Coroutine functions are awaited on the current event loop. Plain
    functions are dispatched through ``anyio.to_thread`` so a blocking
    handler does not stall other requests.
    """
    if _is_async_callable(func):
        return await invoke(func, *args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(func, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result


def _is_async_callable(func: Any) -> bool:
    while isinstance(func, functools.partial):
        func = func.func
    if inspect.iscoroutinefunction(func):
        return True
    call = getattr(func, "__call__", None)  # noqa: B004
    return call is not None and inspect.iscoroutinefunction(call)
