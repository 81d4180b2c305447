"""Routing — declarative route trees mounted onto Starlette.

Endpoints and groups are declared as data, composed into a route tree,
and registered on the application as ordinary Starlette routes. Matching
and dispatch are Starlette's.
"""

from trellis.routing.body import COLLECT, STREAM, BodyStrategy, parse_byte_count
from trellis.routing.builder import (
    RouteItems,
    RoutesBuilder,
    as_route_item,
    routes_block,
    routes_either,
    routes_optional,
)
from trellis.routing.endpoint import (
    Endpoint,
    delete,
    endpoint,
    get,
    head,
    options,
    patch,
    post,
    put,
)
from trellis.routing.group import Group, group
from trellis.routing.path import PathComponent, parameter_names, parse_path, render_path
from trellis.routing.routes import Routes, RouteScope, apply_routes

__all__ = [
    "COLLECT",
    "STREAM",
    "BodyStrategy",
    "Endpoint",
    "Group",
    "PathComponent",
    "RouteItems",
    "RouteScope",
    "Routes",
    "RoutesBuilder",
    "apply_routes",
    "as_route_item",
    "delete",
    "endpoint",
    "get",
    "group",
    "head",
    "options",
    "parameter_names",
    "parse_byte_count",
    "parse_path",
    "patch",
    "post",
    "put",
    "render_path",
    "routes_block",
    "routes_either",
    "routes_optional",
]
