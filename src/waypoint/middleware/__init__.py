"""Middleware protocols: no inheritance required.

A handler is any callable matching:
    async def handler(context: Context, next: Next) -> Any
"""

from waypoint.middleware.protocol import Context, Handler, Next, RequestLike

__all__ = [
    "Context",
    "Handler",
    "Next",
    "RequestLike",
]
