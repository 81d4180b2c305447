"""Route groups.

A group contributes a path prefix and a middleware list to every route
beneath it, at any depth::

    group(
        "api",
        protected_by=[require_token],
        routes=[
            get("users", handler=list_users),
            group("admin", protected_by=[require_admin], routes=[
                delete("users", ":id", handler=remove_user),
            ]),
        ],
    )

``DELETE /api/admin/users/{id}`` runs ``require_token`` then
``require_admin`` before ``remove_user``.

Group middleware is anything the application chain accepts: protocol
callables, Starlette ``Middleware`` specs and ``CORS``. Anything else
raises ``ConfigurationError`` when the group is declared.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from trellis.items import NOTHING
from trellis.middleware.chain import as_middleware
from trellis.middleware.protocol import AnyMiddleware
from trellis.routing.builder import RouteItem, as_route_item, routes_block
from trellis.routing.path import PathComponent, parse_path


@dataclass(frozen=True, slots=True)
class Group:
    """A path prefix and middleware over a nested route subtree."""

    path: tuple[PathComponent, ...]
    middleware: tuple[AnyMiddleware, ...] = ()
    routes: RouteItem = NOTHING

    def __post_init__(self) -> None:
        object.__setattr__(self, "middleware", tuple(as_middleware(mw) for mw in self.middleware))

    @property
    def route_content(self) -> Group:
        return self

    def protected_by(self, *middleware: Any) -> Group:
        """Return a copy with *middleware* appended."""
        return replace(self, middleware=(*self.middleware, *middleware))

    def with_routes(self, *contents: Any) -> Group:
        """Return a copy whose subtree is *contents*."""
        return replace(self, routes=routes_block(*contents))


def _lower_routes(routes: Any) -> RouteItem:
    if routes is None:
        return NOTHING
    if isinstance(routes, (list, tuple)):
        return routes_block(*routes)
    return as_route_item(routes)


def group(
    *path: str | PathComponent,
    protected_by: Iterable[Any] = (),
    routes: Any = None,
) -> Group:
    """Declare a group.

    *routes* is a ``Routes`` collection, a single route declaration, or a
    list of them. Without it the group is empty.
    """
    return Group(
        path=parse_path(*path),
        middleware=tuple(protected_by),
        routes=_lower_routes(routes),
    )
