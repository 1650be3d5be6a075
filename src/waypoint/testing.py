"""Testing helpers for waypoint routers.

Provides minimal request and context objects satisfying the router's
protocols, so routers can be exercised without a server::

    from waypoint.testing import run

    async def test_show_user():
        context, _ = await run(router, "/users/42")
        assert context.body == "42"
"""

from dataclasses import dataclass, field
from typing import Any

from waypoint.router import Router


@dataclass(slots=True)
class Request:
    """A bare request: URL, method, and the params the router fills in."""

    url: str = "/"
    method: str = "GET"
    params: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Context:
    """A bare per-request context. Handlers write ``body`` and ``status``."""

    request: Request = field(default_factory=Request)
    body: Any = None
    status: int | None = None
    state: dict[str, Any] = field(default_factory=dict)


async def run(
    router: Router,
    url: str,
    method: str = "GET",
    next: Any = None,
) -> tuple[Context, Any]:
    """Run *router* as middleware for one request.

    Returns the context (after handlers ran) and whatever the router
    returned. When *next* is omitted, a terminal ``next`` that sets
    ``status`` to 404 is used, mirroring a server's not-found default.
    """
    context = Context(request=Request(url=url, method=method))

    async def not_found() -> None:
        if context.status is None and context.body is None:
            context.status = 404

    result = await router(context, next if next is not None else not_found)
    return context, result
