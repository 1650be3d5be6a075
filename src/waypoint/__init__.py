"""Waypoint: path routing for middleware pipelines.

Declare routes once, dispatch many times. Paths may carry ``:name``
parameters and routers nest under prefixes.

Basic usage::

    from waypoint import create_router

    def routes(r):
        r.get("/users/:id", show_user)
        r.all("/users/:id", fallback)

    router = create_router("/api", routes)

    # As middleware: sets context.request.params, then runs the handler
    await router(context, next)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DuplicateParamError",
    "InvalidMethodError",
    "InvalidOptionsError",
    "InvalidPathError",
    "InvalidPrefixError",
    "RouteMatch",
    "RouteTable",
    "RouteTableBuilder",
    "Router",
    "RouterOptions",
    "WaypointError",
    "create_router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in ("Router", "create_router"):
        import waypoint.router as _router

        return getattr(_router, name)

    if name == "RouterOptions":
        from waypoint.config import RouterOptions

        return RouterOptions

    if name in ("RouteTable", "RouteTableBuilder"):
        from waypoint.routing import table as _table

        return getattr(_table, name)

    if name == "RouteMatch":
        from waypoint.routing.route import RouteMatch

        return RouteMatch

    if name in (
        "ConfigurationError",
        "DuplicateParamError",
        "InvalidMethodError",
        "InvalidOptionsError",
        "InvalidPathError",
        "InvalidPrefixError",
        "WaypointError",
    ):
        import waypoint.errors as _errors

        return getattr(_errors, name)

    msg = f"module 'waypoint' has no attribute {name!r}"
    raise AttributeError(msg)
