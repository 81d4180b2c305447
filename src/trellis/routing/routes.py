"""Route collections and the route applier.

``Routes`` is the application-level declaration that mounts a route tree.
Applying it walks the tree once, carrying a ``RouteScope`` (path prefix
plus middleware) down through groups, and registers one responder per
endpoint on the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from trellis.errors import ConfigurationError
from trellis.items import Nothing
from trellis.middleware.protocol import AnyMiddleware
from trellis.routing.builder import RouteItem, RouteItems, routes_block
from trellis.routing.endpoint import Endpoint
from trellis.routing.group import Group
from trellis.routing.path import PathComponent, parameter_names, render_path
from trellis.routing.responder import EndpointResponder

if TYPE_CHECKING:
    from trellis.app import Application

logger = logging.getLogger(__name__)


class Routes:
    """A route tree, declared as content of an application::

        app.setup(
            Routes(
                get("health", handler=health),
                group("api", protected_by=[auth], routes=[...]),
            ),
        )
    """

    __slots__ = ("item",)

    def __init__(self, *contents: Any) -> None:
        self.item: RouteItem = routes_block(*contents)

    @classmethod
    def from_item(cls, item: RouteItem) -> Routes:
        routes = cls()
        routes.item = item
        return routes

    @property
    def app_content(self) -> Routes:
        return self

    @property
    def route_content(self) -> RouteItem:
        return self.item

    def __repr__(self) -> str:
        return f"Routes({self.item!r})"


@dataclass(frozen=True, slots=True)
class RouteScope:
    """Path prefix and middleware inherited from enclosing groups."""

    path: tuple[PathComponent, ...] = ()
    middleware: tuple[AnyMiddleware, ...] = ()

    def grouped(self, group: Group) -> RouteScope:
        """The scope for routes inside *group*: outer prefix and middleware first."""
        return RouteScope(
            path=(*self.path, *group.path),
            middleware=(*self.middleware, *group.middleware),
        )


def apply_routes(app: Application, item: RouteItem, scope: RouteScope | None = None) -> None:
    """Register every endpoint in *item* on *app*, depth-first, in order."""
    if scope is None:
        scope = RouteScope()
    match item:
        case Endpoint():
            components = (*scope.path, *item.path)
            path = render_path(components)
            _check_unique_parameters(item, path, parameter_names(components))
            responder = EndpointResponder(app, item, scope.middleware)
            app.add_route(item.method, path, responder)
            logger.debug(
                "Registered %s %s (%d group middleware)",
                item.method,
                path,
                len(scope.middleware),
            )
        case Group():
            apply_routes(app, item.routes, scope.grouped(item))
        case RouteItems(children=children):
            for child in children:
                apply_routes(app, child, scope)
        case Nothing():
            pass
        case _:
            msg = f"Cannot register {type(item).__name__}; expected a route item"
            raise TypeError(msg)


def _check_unique_parameters(endpoint: Endpoint, path: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            msg = (
                f"{endpoint.method} {path} captures {name!r} more than once. "
                f"Rename the parameter or drop the extra '**'."
            )
            raise ConfigurationError(msg)
        seen.add(name)
