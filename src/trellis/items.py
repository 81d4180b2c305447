"""Item tree — the intermediate form of an application declaration.

Every declaration lowers to exactly one ``Item``. The set of variants is
closed::

    Nothing               no-op
    Use                   register one middleware
    HTTPServer            set hostname and/or port
    LoggerLevel           set the active log level
    ManualConfiguration   run a callback against the live app
    Routes                mount a route tree
    Items                 an ordered group of items

Items are frozen once built and carry no identity beyond their position
in the tree. ``trellis.applier`` consumes them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from starlette.middleware import Middleware as StarletteMiddleware

if TYPE_CHECKING:
    from trellis.logger import LoggerLevel
    from trellis.manual import ManualConfiguration
    from trellis.middleware.protocol import Middleware
    from trellis.routing.routes import Routes
    from trellis.server import HTTPServer


@dataclass(frozen=True, slots=True)
class Nothing:
    """The empty declaration. Applying it has no effect."""

    @property
    def app_content(self) -> Nothing:
        return self

    @property
    def route_content(self) -> Nothing:
        return self


NOTHING = Nothing()


@dataclass(frozen=True, slots=True)
class Use:
    """Registers one middleware on the application chain.

    ``middleware`` is either a trellis middleware callable or a Starlette
    ``Middleware`` spec (``Middleware(GZipMiddleware, minimum_size=500)``).
    """

    middleware: Middleware | StarletteMiddleware

    @property
    def app_content(self) -> Use:
        return self


@dataclass(frozen=True, slots=True)
class Items:
    """An ordered group of items, applied left to right."""

    children: tuple[Item, ...]

    @property
    def app_content(self) -> Items:
        return self


type Item = Nothing | Use | HTTPServer | LoggerLevel | ManualConfiguration | Routes | Items


class AppContent(Protocol):
    """Anything that can take part in an application declaration."""

    @property
    def app_content(self) -> Item: ...


def as_item(value: Any) -> Item:
    """Lower a single declaration to its ``Item``.

    Middleware may be declared bare: a middleware callable or a Starlette
    ``Middleware`` spec becomes ``Use(value)``.
    """
    if value is None:
        return NOTHING
    content = getattr(value, "app_content", None)
    if content is not None:
        return content
    if isinstance(value, StarletteMiddleware):
        return Use(value)
    if isinstance(value, type):
        msg = (
            f"{value.__name__} is a class. Declare a middleware instance, or wrap "
            f"a Starlette middleware class in starlette.middleware.Middleware(...)."
        )
        raise TypeError(msg)
    if callable(value):
        return Use(value)
    msg = (
        f"Cannot use {type(value).__name__} in an application declaration. "
        f"Declare middleware, HTTPServer, Logger.level(), ManualConfiguration, "
        f"or Routes."
    )
    raise TypeError(msg)


def leaves(item: Item) -> Iterator[Item]:
    """Yield the leaves of *item* depth-first, left to right.

    ``Items`` groups are flattened and ``Nothing`` is skipped, so the
    result reads in declaration order.
    """
    match item:
        case Nothing():
            return
        case Items(children=children):
            for child in children:
                yield from leaves(child)
        case _:
            yield item
