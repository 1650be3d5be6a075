"""Router configuration.

RouterOptions is a frozen dataclass: immutable after creation, so a router
built from it can be shared across threads without copying.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from waypoint.errors import InvalidOptionsError


@dataclass(frozen=True, slots=True)
class RouterOptions:
    """Options applied to every route declared on one router.

    All fields have defaults. Override what you need::

        options = RouterOptions(prefix="/api", end=True)
    """

    # Prepended to every declared path before compilation
    prefix: str = ""

    # Anchor matchers at the end of the path (exact segment count)
    end: bool = False

    # Match literal segments case-sensitively
    case: bool = False

    def with_prefix(self, outer: str) -> "RouterOptions":
        """Return a copy with *outer* prepended to the current prefix."""
        return replace(self, prefix=outer + self.prefix)


_FIELD_NAMES = frozenset(f.name for f in fields(RouterOptions))


def coerce_options(value: Any) -> RouterOptions:
    """Normalize the options argument of ``create_router``.

    Accepts ``None`` (defaults), a bare prefix string, a mapping of
    option names, or a ``RouterOptions`` instance.

    Raises ``InvalidOptionsError`` for anything else, or for a mapping
    carrying keys that are not router options.
    """
    if value is None:
        return RouterOptions()
    if isinstance(value, RouterOptions):
        return value
    if isinstance(value, str):
        return RouterOptions(prefix=value)
    if isinstance(value, Mapping):
        unknown = set(value) - _FIELD_NAMES
        if unknown:
            msg = f"Unknown router options: {', '.join(sorted(map(str, unknown)))}"
            raise InvalidOptionsError(msg, value)
        return RouterOptions(**value)

    msg = f"Options can only be a string or a mapping, got {type(value).__name__}"
    raise InvalidOptionsError(msg, value)
