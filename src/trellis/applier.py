"""Applier — walks an Item tree and configures a live application.

Depth-first, left to right, one side effect per leaf:

    Use                   app.add_middleware(middleware)
    HTTPServer            app.configure_server(host=..., port=...) for set fields
    LoggerLevel           app.log_level = level
    ManualConfiguration   handler(app); exceptions propagate and end the walk
    Routes                register every endpoint (trellis.routing.routes)
    Items                 recurse in order
    Nothing               nothing

The walk is not transactional. When a manual callback raises, everything
applied before it stays applied to the app.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trellis.items import Item, Items, Nothing, Use
from trellis.logger import LoggerLevel
from trellis.manual import ManualConfiguration
from trellis.routing.routes import Routes, apply_routes
from trellis.server import HTTPServer

if TYPE_CHECKING:
    from trellis.app import Application

logger = logging.getLogger(__name__)


def apply(item: Item, app: Application) -> None:
    """Perform the side effects of *item* on *app*."""
    match item:
        case Use(middleware=middleware):
            logger.debug("Using middleware %r", middleware)
            app.add_middleware(middleware)
        case HTTPServer(hostname=hostname, port=port):
            logger.debug("Configuring server hostname=%s port=%s", hostname, port)
            app.configure_server(host=hostname, port=port)
        case LoggerLevel(level=level):
            logger.debug("Setting log level to %s", level)
            app.log_level = level
        case ManualConfiguration(handler=handler):
            logger.debug("Running manual configuration %r", handler)
            handler(app)
        case Routes():
            apply_routes(app, item.item)
        case Items(children=children):
            for child in children:
                apply(child, app)
        case Nothing():
            pass
        case _:
            msg = f"Cannot apply {type(item).__name__}; expected an Item"
            raise TypeError(msg)
