"""Invoke helpers: call sync or async handlers uniformly.

Route handlers and ``next`` callables can be ``def`` or ``async def``.
Any code that calls one must handle both cases, so the check lives here.

Usage::

    from waypoint._internal.invoke import invoke

    result = await invoke(handler, context, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync, returns immediately
        def show(ctx, next):
            ctx.body = ctx.request.params["id"]

        # async, awaited automatically
        async def show(ctx, next):
            await next()
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
