"""Context, Handler, and Next protocols.

A route handler is any callable matching::

    async def show_user(context: Context, next: Next) -> Any: ...

No base class required. The router checks the shape, not the lineage,
and plain ``def`` handlers work too.

The request and response objects belong to whatever server runs the
pipeline. The router needs only a URL, a method, and somewhere to put
the extracted path parameters.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias


class RequestLike(Protocol):
    """The slice of a request the router reads and writes."""

    url: str
    method: str
    params: dict[str, str]


class Context(Protocol):
    """A per-request context carrying the request."""

    @property
    def request(self) -> RequestLike: ...


# The next stage in the middleware chain
Next: TypeAlias = Callable[[], Awaitable[Any] | Any]


class Handler(Protocol):
    """Protocol for route handlers and middleware.

    Accepts both functions and callable objects::

        # Function handler
        async def show_user(context, next):
            context.body = context.request.params["id"]

        # Class handler
        class Fallback:
            async def __call__(self, context, next):
                await next()
    """

    def __call__(self, context: Context, next: Next) -> Awaitable[Any] | Any: ...
