"""Route builder — composes route declarations into a single RouteItem.

Same rules as the application builder (``trellis.builder``), over the
route variants::

    Nothing      no-op
    Endpoint     register one route
    Group        path prefix + middleware over a nested subtree
    RouteItems   an ordered group of route items
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from trellis.items import NOTHING, Nothing

if TYPE_CHECKING:
    from trellis.routing.endpoint import Endpoint
    from trellis.routing.group import Group


@dataclass(frozen=True, slots=True)
class RouteItems:
    """An ordered group of route items."""

    children: tuple[RouteItem, ...]

    @property
    def route_content(self) -> RouteItems:
        return self


type RouteItem = Nothing | RouteItems | Endpoint | Group


class RouteContent(Protocol):
    """Anything that can take part in a route declaration."""

    @property
    def route_content(self) -> RouteItem: ...


def as_route_item(value: Any) -> RouteItem:
    """Lower a single route declaration to its ``RouteItem``."""
    if value is None:
        return NOTHING
    content = getattr(value, "route_content", None)
    if content is None:
        msg = (
            f"Cannot use {type(value).__name__} in a route declaration. "
            f"Declare endpoints (get, post, ...), groups, or Routes."
        )
        raise TypeError(msg)
    return content


def routes_block(*contents: Any) -> RouteItem:
    """Compose route declarations in order."""
    if not contents:
        return NOTHING
    return RouteItems(tuple(as_route_item(content) for content in contents))


def routes_optional(content: Any | None) -> RouteItem:
    """Compose a route declaration that may be absent."""
    if content is None:
        return NOTHING
    return RouteItems((as_route_item(content),))


def routes_either(condition: bool, first: Any, second: Any) -> RouteItem:
    """Keep *first* when *condition* holds, otherwise *second*."""
    return RouteItems((as_route_item(first if condition else second),))


class RoutesBuilder:
    """Ordered-list builder for route declarations."""

    __slots__ = ("_items",)

    def __init__(self, *contents: Any) -> None:
        self._items: list[RouteItem] = [as_route_item(content) for content in contents]

    def add(self, *contents: Any) -> RoutesBuilder:
        self._items.extend(as_route_item(content) for content in contents)
        return self

    def add_if(self, condition: bool, content: Any) -> RoutesBuilder:
        self._items.append(routes_optional(content if condition else None))
        return self

    def add_either(self, condition: bool, first: Any, second: Any) -> RoutesBuilder:
        self._items.append(routes_either(condition, first, second))
        return self

    def build(self) -> RouteItem:
        if not self._items:
            return NOTHING
        return RouteItems(tuple(self._items))

    @property
    def route_content(self) -> RouteItem:
        return self.build()

    def __len__(self) -> int:
        return len(self._items)
