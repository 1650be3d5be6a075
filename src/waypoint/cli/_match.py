"""``waypoint match``: dry-run a dispatch.

Shows the pattern and handler a request would reach and the path
parameters it would receive, without running the handler.
"""

import argparse
import sys

from waypoint.cli._resolve import resolve_router
from waypoint.errors import ConfigurationError
from waypoint.routing.dispatch import DEFAULT_BINDING


def run_match(args: argparse.Namespace) -> None:
    """Dispatch ``args.path`` / ``args.method`` and print the outcome.

    Exits with code 1 when no declared handler would run.
    """
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = router.match(args.path, args.method)
    if result.pattern is None:
        print(f"No route matches {args.method.upper()} {args.path}")
        raise SystemExit(1)

    shown = result.pattern.template or result.pattern.source
    handler_name = getattr(result.handler, "__name__", str(result.handler))
    if result.binding is DEFAULT_BINDING:
        print(f"{shown} matches, but has no handler for {args.method.upper()}")
        raise SystemExit(1)

    print(f"pattern:  {shown}")
    print(f"handler:  {handler_name}")
    for name, value in result.params.items():
        print(f"param:    {name} = {value}")
    if result.ambiguous:
        print(f"warning:  {result.candidates} patterns match; the first declared one wins")
