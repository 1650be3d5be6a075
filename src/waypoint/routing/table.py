"""Route table and the builder that populates it.

Routes are declared on a ``RouteTableBuilder`` during setup and frozen
into an immutable ``RouteTable``. Nothing can be added after freezing,
which is what lets any number of requests dispatch against the table
without locks.
"""

import logging
import re
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from waypoint.config import RouterOptions
from waypoint.errors import ConfigurationError, InvalidMethodError
from waypoint.routing.pattern import CompiledPattern, compile_pattern, extract_params, validate_prefix
from waypoint.routing.route import METHODS, HandlerBinding, RouteEntry

logger = logging.getLogger("waypoint.routing")


class RouteTable(Mapping[CompiledPattern, RouteEntry]):
    """Immutable mapping of compiled pattern to per-method handler bindings.

    Iteration follows the order in which each pattern was first declared.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[CompiledPattern, Mapping[str, HandlerBinding]] | None = None) -> None:
        frozen = {
            pattern: MappingProxyType(dict(entry)) for pattern, entry in (entries or {}).items()
        }
        self._entries: Mapping[CompiledPattern, RouteEntry] = MappingProxyType(frozen)

    def __getitem__(self, pattern: CompiledPattern) -> RouteEntry:
        return self._entries[pattern]

    def __iter__(self) -> Iterator[CompiledPattern]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RouteTable({len(self)} patterns)"


class RouteTableBuilder:
    """The surface a router's builder function declares routes on.

    Usage::

        builder = RouteTableBuilder(RouterOptions(prefix="/api"))
        builder.get("/users/:id", show_user)
        builder.all("/users/:id", fallback)
        table = builder.freeze()

    Declaring the same effective path twice adds to the existing entry;
    declaring the same method twice on it replaces the earlier handler.
    """

    __slots__ = ("_entries", "_frozen", "_options")

    def __init__(self, options: RouterOptions | None = None) -> None:
        self._options = options or RouterOptions()
        self._entries: dict[CompiledPattern, dict[str, HandlerBinding]] = {}
        self._frozen = False

    @property
    def prefix(self) -> str:
        return self._options.prefix

    # -- Declarations --

    def route(
        self,
        method: str,
        template: str | re.Pattern[str],
        handler: Callable[..., Any],
    ) -> None:
        """Declare *handler* for *method* on *template*.

        *method* is case-insensitive and must be one of ``METHODS``.
        """
        self._check_not_frozen()
        name = method.upper() if isinstance(method, str) else method
        if name not in METHODS:
            msg = f"Unsupported method {method!r}. Supported methods: {', '.join(METHODS)}"
            raise InvalidMethodError(msg, method)
        if not callable(handler):
            msg = f"Handler for {name} {template!r} must be callable, got {type(handler).__name__}"
            raise ConfigurationError(msg, handler)

        pattern = compile_pattern(template, self._options)
        params = extract_params(template, self._options)
        self._upsert(pattern, name, HandlerBinding(handler=handler, params=params))
        logger.debug("Route declared: %s %s -> %s", name, pattern.template or pattern.source, _handler_name(handler))

    def get(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        self.route("GET", template, handler)

    def post(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        self.route("POST", template, handler)

    def put(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        self.route("PUT", template, handler)

    def patch(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        self.route("PATCH", template, handler)

    def delete(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        self.route("DELETE", template, handler)

    def all(self, template: str | re.Pattern[str], handler: Callable[..., Any]) -> None:
        """Declare a fallback used for any method without its own handler."""
        self.route("ALL", template, handler)

    def nest(self, child: Any) -> None:
        """Merge a child router's table, built under this builder's prefix.

        *child* is a ``Router`` or any callable that takes the current
        prefix and returns a ``RouteTable``. Overlapping patterns merge
        per method; the child's handlers win.
        """
        self._check_not_frozen()
        factory = getattr(child, "nested_factory", child)
        if not callable(factory):
            msg = f"nest() expects a router or a prefix factory, got {type(child).__name__}"
            raise ConfigurationError(msg, child)

        table = factory(self.prefix)
        if not isinstance(table, RouteTable):
            msg = f"Nested factory returned {type(table).__name__}, not a RouteTable"
            raise ConfigurationError(msg, table)

        for pattern, entry in table.items():
            for method, binding in entry.items():
                self._upsert(pattern, method, binding)
        logger.debug("Nested %d patterns under prefix %r", len(table), self.prefix)

    # -- Freezing --

    def freeze(self) -> RouteTable:
        """Stop accepting declarations and return the immutable table."""
        self._frozen = True
        return RouteTable(self._entries)

    def _upsert(self, pattern: CompiledPattern, method: str, binding: HandlerBinding) -> None:
        entry = self._entries.setdefault(pattern, {})
        entry[method] = binding

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot add routes after the route table has been built."
            raise RuntimeError(msg)


def build_table(options: RouterOptions, builder: Callable[[RouteTableBuilder], Any]) -> RouteTable:
    """Run *builder* once against a fresh builder and return the frozen table.

    The prefix is validated up front so a router declaring no routes
    still rejects a malformed prefix.
    """
    validate_prefix(options.prefix)
    table_builder = RouteTableBuilder(options)
    builder(table_builder)
    table = table_builder.freeze()
    logger.debug("Route table built: %d patterns, prefix %r", len(table), options.prefix)
    return table


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None) or repr(handler)
