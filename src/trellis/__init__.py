"""Trellis — declarative setup for Starlette applications.

Describe the server binding, log level, middleware and routes as data,
then apply the description onto an application in one pass.

Basic usage::

    from trellis import Application, HTTPServer, Logger, Routes, get, group

    app = Application().setup(
        HTTPServer(hostname="0.0.0.0", port=8080),
        Logger.level("info"),
        Routes(
            get("health", handler=lambda: "ok"),
            group("api", protected_by=[require_token], routes=[
                get("users", handler=list_users),
            ]),
        ),
    )

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "CORS",
    "COLLECT",
    "STREAM",
    "AllowOrigin",
    "AppBuilder",
    "AppConfig",
    "Application",
    "BodyStrategy",
    "ConfigurationError",
    "FileMiddleware",
    "HTTPServer",
    "Items",
    "Level",
    "Logger",
    "ManualConfiguration",
    "Middleware",
    "NOTHING",
    "Next",
    "PayloadTooLarge",
    "Request",
    "Routes",
    "RoutesBuilder",
    "TrellisError",
    "Use",
    "block",
    "delete",
    "either",
    "endpoint",
    "get",
    "group",
    "head",
    "log_level",
    "optional",
    "options",
    "patch",
    "post",
    "put",
]

_ROUTING_NAMES = frozenset(
    {
        "COLLECT",
        "STREAM",
        "BodyStrategy",
        "Routes",
        "RoutesBuilder",
        "delete",
        "endpoint",
        "get",
        "group",
        "head",
        "options",
        "patch",
        "post",
        "put",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trellis`` fast while providing a clean top-level API.
    """
    if name == "Application":
        from trellis.app import Application

        return Application

    if name == "AppConfig":
        from trellis.config import AppConfig

        return AppConfig

    if name == "Request":
        from trellis.http.request import Request

        return Request

    if name in ("AppBuilder", "block", "either", "optional"):
        from trellis import builder as _builder

        return getattr(_builder, name)

    if name in ("Items", "NOTHING", "Use"):
        from trellis import items as _items

        return getattr(_items, name)

    if name == "HTTPServer":
        from trellis.server import HTTPServer

        return HTTPServer

    if name in ("Level", "Logger", "log_level"):
        from trellis import logger as _logger

        return getattr(_logger, name)

    if name == "ManualConfiguration":
        from trellis.manual import ManualConfiguration

        return ManualConfiguration

    if name in _ROUTING_NAMES:
        from trellis import routing as _routing

        return getattr(_routing, name)

    if name in ("CORS", "AllowOrigin", "FileMiddleware", "Middleware", "Next"):
        from trellis import middleware as _mw

        return getattr(_mw, name)

    if name in ("ConfigurationError", "PayloadTooLarge", "TrellisError"):
        from trellis import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
