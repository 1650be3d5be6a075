"""Waypoint exception hierarchy.

Everything here is raised while a router is being built. Dispatch never
raises for a missing route or method; it falls through to the next
middleware instead.
"""

from typing import Any


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a router is declared with invalid configuration.

    Carries the offending value so callers can report it without
    parsing the message.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidPathError(ConfigurationError):
    """A declared path template does not match the path grammar."""


class InvalidPrefixError(ConfigurationError):
    """A router prefix does not match the prefix grammar."""


class InvalidOptionsError(ConfigurationError):
    """Router options are neither a prefix string nor an options mapping."""


class InvalidMethodError(ConfigurationError):
    """A route was declared for a method the router does not support."""


class DuplicateParamError(ConfigurationError):
    """The same parameter name appears twice in one path template."""

    def __init__(self, message: str, value: Any = None, name: str = "") -> None:
        super().__init__(message, value)
        self.name = name
