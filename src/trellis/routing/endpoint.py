"""Endpoint declarations.

One record for every method: the HTTP method and body strategy are plain
fields, not subclasses::

    get("users", ":id", handler=show_user)
    post("users", handler=create_user, body=BodyStrategy.collect("1mb"))
    put("upload", handler=upload, body=BodyStrategy.stream())

Each factory also works as a decorator; the decorated name is bound to
the ``Endpoint``::

    @get("health")
    def health() -> str:
        return "ok"
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from trellis._internal.types import Handler
from trellis.routing.body import COLLECT, BodyStrategy
from trellis.routing.path import PathComponent, parse_path

type PathPart = str | PathComponent


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A single route: method + path + handler.

    ``body=None`` means collect with the application's default maximum.
    """

    method: str
    path: tuple[PathComponent, ...]
    handler: Handler
    body: BodyStrategy | None = None

    @property
    def route_content(self) -> Endpoint:
        return self

    def __str__(self) -> str:
        return f"{self.method} /{'/'.join(str(c) for c in self.path)}"


def endpoint(
    method: str,
    *path: PathPart,
    handler: Handler | None = None,
    body: BodyStrategy | None = None,
) -> Any:
    """Declare an endpoint for any method, or return a decorator that does."""
    components = parse_path(*path)
    verb = method.upper()

    if handler is None:

        def decorator(func: Handler) -> Endpoint:
            return Endpoint(verb, components, func, body)

        return decorator
    return Endpoint(verb, components, handler, body)


def get(
    *path: PathPart, handler: Handler | None = None
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a GET endpoint."""
    return endpoint("GET", *path, handler=handler)


def head(
    *path: PathPart, handler: Handler | None = None
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a HEAD endpoint."""
    return endpoint("HEAD", *path, handler=handler)


def options(
    *path: PathPart, handler: Handler | None = None
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare an OPTIONS endpoint."""
    return endpoint("OPTIONS", *path, handler=handler)


def post(
    *path: PathPart,
    handler: Handler | None = None,
    body: BodyStrategy = COLLECT,
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a POST endpoint. Collects the body by default."""
    return endpoint("POST", *path, handler=handler, body=body)


def put(
    *path: PathPart,
    handler: Handler | None = None,
    body: BodyStrategy = COLLECT,
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a PUT endpoint. Collects the body by default."""
    return endpoint("PUT", *path, handler=handler, body=body)


def patch(
    *path: PathPart,
    handler: Handler | None = None,
    body: BodyStrategy = COLLECT,
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a PATCH endpoint. Collects the body by default."""
    return endpoint("PATCH", *path, handler=handler, body=body)


def delete(
    *path: PathPart,
    handler: Handler | None = None,
    body: BodyStrategy = COLLECT,
) -> Endpoint | Callable[[Handler], Endpoint]:
    """Declare a DELETE endpoint. Collects the body by default."""
    return endpoint("DELETE", *path, handler=handler, body=body)
