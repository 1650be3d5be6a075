"""Router: a frozen route table exposed as middleware and as a nesting factory.

Usage::

    from waypoint import create_router

    def users(r):
        r.get("/:id", show_user)
        r.delete("/:id", delete_user)

    def api(r):
        r.nest(create_router("/users", users))
        r.get("/", index)

    router = create_router("/api", api)

    # In a middleware pipeline
    await router(context, next)

The builder function runs once when the router is created. Every
configuration error surfaces there, before any request is dispatched.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from waypoint._internal.invoke import invoke
from waypoint.config import RouterOptions, coerce_options
from waypoint.errors import InvalidOptionsError
from waypoint.middleware.protocol import Context, Next
from waypoint.routing.dispatch import dispatch
from waypoint.routing.route import RouteMatch
from waypoint.routing.table import RouteTable, RouteTableBuilder, build_table

logger = logging.getLogger("waypoint.routing")

Builder: TypeAlias = Callable[[RouteTableBuilder], Any]


class Router:
    """A compiled, immutable router.

    Two operations share one object:

    - ``as_middleware(context, next)`` dispatches a request. Calling the
      router directly does the same, so it drops into a middleware list.
    - ``nested_factory(prefix)`` rebuilds the routes under an outer
      prefix. ``RouteTableBuilder.nest`` uses it to compose routers.
    """

    __slots__ = ("_builder", "_options", "_table")

    def __init__(self, options: RouterOptions, builder: Builder) -> None:
        self._options = options
        self._builder = builder
        self._table = build_table(options, builder)

    @property
    def options(self) -> RouterOptions:
        return self._options

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> list[tuple[str, str, Callable[..., Any]]]:
        """Return ``(method, pattern, handler)`` rows in declaration order.

        Useful for introspection and the ``waypoint routes`` command.
        """
        rows: list[tuple[str, str, Callable[..., Any]]] = []
        for pattern, entry in self._table.items():
            shown = pattern.template or pattern.source
            for method, binding in entry.items():
                rows.append((method, shown, binding.handler))
        return rows

    def match(self, path: str, method: str = "GET") -> RouteMatch:
        """Dispatch without invoking anything."""
        return dispatch(self._table, path, method)

    async def as_middleware(self, context: Context, next: Next | None = None) -> Any:
        """Dispatch ``context.request`` and run the selected handler.

        ``context.request.params`` is set before the handler runs. When
        nothing matches, the pass-through handler awaits ``next``.
        Handler errors propagate unchanged.
        """
        request = context.request
        result = dispatch(self._table, request.url, request.method)
        request.params = result.params
        return await invoke(result.handler, context, next)

    def nested_factory(self, prefix: str) -> RouteTable:
        """Build a fresh table with *prefix* prepended to this router's prefix.

        This router's own options and table are left untouched.
        """
        return build_table(self._options.with_prefix(prefix), self._builder)

    async def __call__(self, context: Context, next: Next | None = None) -> Any:
        return await self.as_middleware(context, next)

    def __repr__(self) -> str:
        return f"Router(prefix={self._options.prefix!r}, patterns={len(self._table)})"


def create_router(options: Any = None, builder: Builder | None = None) -> Router:
    """Create a router from options and a builder function.

    Accepted forms::

        create_router(builder)
        create_router("/prefix", builder)
        create_router({"prefix": "/p", "end": True, "case": True}, builder)
        create_router(RouterOptions(prefix="/p"), builder)

    Raises ``InvalidOptionsError`` for unusable options or a missing
    builder, and the other ``ConfigurationError`` subclasses for
    malformed routes.
    """
    if builder is None and callable(options) and not isinstance(options, RouterOptions):
        builder, options = options, None

    if builder is None or not callable(builder):
        msg = "create_router() requires a builder function"
        raise InvalidOptionsError(msg, builder)

    return Router(coerce_options(options), builder)
