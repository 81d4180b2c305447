"""Trellis application.

Mutable during setup (middleware, server binding, log level, routes).
Frozen into a Starlette app when ``app.run()`` or ``__call__()`` is first
invoked.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware as StarletteMiddleware
from starlette.routing import Route
from starlette.types import ASGIApp, Receive, Scope, Send

from trellis.config import AppConfig
from trellis.logger import Level
from trellis.middleware.chain import to_starlette
from trellis.middleware.protocol import Middleware

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegisteredRoute:
    """A route waiting to be compiled into the Starlette router."""

    method: str
    path: str
    endpoint: ASGIApp


class Application:
    """The application a declaration is applied to.

    Owns the server binding, the log level, the middleware chain and the
    route table, and compiles them into a Starlette app on first use::

        app = Application().setup(
            HTTPServer(hostname="0.0.0.0", port=8080),
            Logger.level("debug"),
            CORS(),
            Routes(get("health", handler=lambda: "ok")),
        )
        app.run()

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app even if
        several workers receive their first request at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pending_routes",
        "_starlette",
        "config",
        "logger",
    )

    def __init__(self, config: AppConfig | None = None, *, name: str = "trellis.app") -> None:
        self.config: AppConfig = config or AppConfig()
        self.logger: logging.Logger = logging.getLogger(name)
        self.logger.setLevel(self.config.log_level.value_int)
        self._middleware_list: list[Middleware | StarletteMiddleware] = []
        self._pending_routes: list[RegisteredRoute] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._starlette: Starlette | None = None

    # -- Declarative setup --

    def setup(self, *contents: Any) -> Application:
        """Apply declarations to this app, in order, and return it.

        A failing ``ManualConfiguration`` aborts the rest of the walk and
        its exception propagates; directives already applied stay applied.
        """
        from trellis.applier import apply
        from trellis.builder import block

        apply(block(*contents), self)
        return self

    # -- Middleware --

    def add_middleware(self, middleware: Middleware | StarletteMiddleware) -> None:
        """Append a middleware to the application chain."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    @property
    def middleware(self) -> tuple[Middleware | StarletteMiddleware, ...]:
        """Registered middleware, outermost first."""
        return tuple(self._middleware_list)

    # -- Server --

    def configure_server(self, *, host: str | None = None, port: int | None = None) -> None:
        """Overwrite the server binding. ``None`` leaves a field unchanged."""
        self._check_not_frozen()
        changes: dict[str, Any] = {}
        if host is not None:
            changes["host"] = host
        if port is not None:
            changes["port"] = port
        if changes:
            self.config = replace(self.config, **changes)

    # -- Logging --

    @property
    def log_level(self) -> Level:
        return self.config.log_level

    @log_level.setter
    def log_level(self, value: Level | str | int) -> None:
        self._check_not_frozen()
        level = Level.coerce(value)
        self.config = replace(self.config, log_level=level)
        self.logger.setLevel(level.value_int)

    # -- Routes --

    def add_route(self, method: str, path: str, endpoint: ASGIApp) -> None:
        """Register an ASGI endpoint for *method* at the Starlette path *path*.

        Duplicate method + path registrations are not detected here; the
        Starlette router resolves them (first registered wins).
        """
        self._check_not_frozen()
        self._pending_routes.append(RegisteredRoute(method.upper(), path, endpoint))

    @property
    def routes(self) -> tuple[RegisteredRoute, ...]:
        """Registered routes, in registration order."""
        return tuple(self._pending_routes)

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn.

        Compiles the app (freezing routes and middleware) and starts
        serving requests on the configured binding.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        import uvicorn

        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("Serving on http://%s:%d", _host, _port)
        uvicorn.run(
            self,
            host=_host,
            port=_port,
            log_level=self.config.log_level.uvicorn_name,
        )

    @property
    def starlette(self) -> Starlette:
        """The compiled Starlette app. Freezes this app."""
        self._ensure_frozen()
        assert self._starlette is not None
        return self._starlette

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. Delegates everything to Starlette."""
        await self.starlette(scope, receive, send)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into a Starlette app.

        MUST only be called while holding _freeze_lock.
        """
        routes = [
            Route(pending.path, endpoint=pending.endpoint, methods=[pending.method])
            for pending in self._pending_routes
        ]
        middleware = [to_starlette(mw) for mw in self._middleware_list]
        self._starlette = Starlette(
            debug=self.config.debug,
            routes=routes,
            middleware=middleware,
        )
        self._frozen = True
        logger.debug(
            "Compiled %d routes and %d middleware",
            len(routes),
            len(middleware),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Apply declarations before calling app.run()."
            )
            raise RuntimeError(msg)
