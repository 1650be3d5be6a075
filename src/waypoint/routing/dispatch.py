"""Dispatch a live (path, method) pair against a frozen route table.

The dispatcher only reads the table. Everything it produces (the
parameter bag, the match result) is fresh per call, so concurrent
dispatches need no coordination.
"""

import logging
from typing import Any

from waypoint._internal.invoke import invoke
from waypoint.routing.pattern import split_segments
from waypoint.routing.route import ALL, HandlerBinding, RouteMatch
from waypoint.routing.table import RouteTable

logger = logging.getLogger("waypoint.routing")


async def pass_through(context: Any, next: Any) -> Any:
    """Default handler: do nothing and hand control to the next middleware."""
    if next is None:
        return None
    return await invoke(next)


DEFAULT_BINDING = HandlerBinding(handler=pass_through)


def strip_query(url: str) -> str:
    """Drop the query string and fragment from a request URL."""
    path, _, _ = url.partition("?")
    path, _, _ = path.partition("#")
    return path


def dispatch(table: RouteTable, path: str, method: str) -> RouteMatch:
    """Select the handler for *path* and *method* and extract its parameters.

    Patterns are tested in declaration order and the first match wins.
    When several patterns match, the overlap is logged and reported via
    ``RouteMatch.candidates``.

    A path with no matching pattern, or a matching pattern without a
    binding for *method* or ``ALL``, yields the pass-through binding
    with an empty parameter bag. This never raises.
    """
    path = strip_query(path)

    selected = None
    candidates = 0
    for pattern in table:
        found = pattern.match(path)
        if found is None:
            continue
        candidates += 1
        if selected is None:
            selected = (pattern, found)

    if selected is None:
        logger.debug("No route matches %s %r", method, path)
        return RouteMatch(binding=DEFAULT_BINDING, params={})

    pattern, found = selected
    if candidates > 1:
        logger.debug(
            "Ambiguous route for %s %r: %d patterns match, using first declared %r",
            method,
            path,
            candidates,
            pattern.template or pattern.source,
        )

    entry = table[pattern]
    binding = entry.get(method.upper()) or entry.get(ALL)
    if binding is None:
        logger.debug("Route %r has no handler for %s", pattern.template or pattern.source, method)
        return RouteMatch(binding=DEFAULT_BINDING, params={}, pattern=pattern, candidates=candidates)

    segments = split_segments(path)
    params: dict[str, str] = {}
    if pattern.is_native:
        params.update({k: v for k, v in found.groupdict().items() if v is not None})
    for name, index in binding.params.items():
        if index < len(segments):
            params[name] = segments[index]

    return RouteMatch(binding=binding, params=params, pattern=pattern, candidates=candidates)
