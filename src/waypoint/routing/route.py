"""HandlerBinding and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from waypoint.routing.pattern import CompiledPattern, ParamMap

# Methods a route can be declared for; ALL is the per-route fallback
METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "ALL")

ALL = "ALL"

RouteEntry: TypeAlias = Mapping[str, "HandlerBinding"]


@dataclass(frozen=True, slots=True)
class HandlerBinding:
    """A handler plus the positions of its path parameters."""

    handler: Callable[..., Any]
    params: ParamMap = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a dispatch.

    ``pattern`` is ``None`` when no route matched the path. ``candidates``
    counts every pattern that matched; more than one means the routes
    overlap and the first-declared one was used.
    """

    binding: HandlerBinding
    params: dict[str, str]
    pattern: CompiledPattern | None = None
    candidates: int = 0

    @property
    def handler(self) -> Callable[..., Any]:
        return self.binding.handler

    @property
    def ambiguous(self) -> bool:
        return self.candidates > 1
