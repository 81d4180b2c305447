"""Middleware chain composition.

Application middleware is handed to Starlette, which builds its own stack
from ``Middleware`` specs.

Route-group middleware is built per endpoint, first declared outermost.
Protocol callables declared inside every Starlette spec of the group are
composed directly around the endpoint and see the trellis ``Request``.
Starlette specs wrap the endpoint as ASGI apps, and protocol callables
declared outside a spec run through ``BaseHTTPMiddleware``, exactly as on
the application chain.
"""

from collections.abc import Sequence
from typing import Any

from starlette.middleware import Middleware as StarletteMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from trellis.errors import ConfigurationError
from trellis.items import Use
from trellis.middleware.protocol import AnyMiddleware, Middleware, Next


def as_middleware(value: Any) -> AnyMiddleware:
    """Normalize a middleware declaration.

    Accepts protocol callables, Starlette ``Middleware`` specs, and
    declarations that lower to ``Use`` (such as ``CORS``).

    Raises:
        ConfigurationError: If *value* is not a middleware.
    """
    if isinstance(value, StarletteMiddleware):
        return value
    content = getattr(value, "app_content", None)
    if isinstance(content, Use):
        return content.middleware
    if callable(value) and not isinstance(value, type):
        return value
    msg = (
        f"{value!r} is not a middleware. Declare an async (request, next) callable "
        f"or a starlette.middleware.Middleware(...) spec."
    )
    raise ConfigurationError(msg)


def compose(middleware: Sequence[Middleware], endpoint: Next) -> Next:
    """Wrap *middleware* around *endpoint*, first element outermost."""
    handler = endpoint
    for mw in reversed(middleware):
        outer = handler

        async def make_next(request: Any, _mw: Middleware = mw, _next: Next = outer) -> Any:
            return await _mw(request, _next)

        handler = make_next
    return handler


def split_innermost(
    middleware: Sequence[AnyMiddleware],
) -> tuple[tuple[AnyMiddleware, ...], tuple[Middleware, ...]]:
    """Split off the protocol callables declared after the last Starlette spec.

    Returns ``(outer, inner)``: *inner* can be composed around the endpoint,
    *outer* has to be stacked as ASGI.
    """
    index = len(middleware)
    while index > 0 and not isinstance(middleware[index - 1], StarletteMiddleware):
        index -= 1
    return tuple(middleware[:index]), tuple(middleware[index:])  # type: ignore[arg-type]


def wrap_asgi(middleware: Sequence[AnyMiddleware], app: ASGIApp) -> ASGIApp:
    """Stack *middleware* around the ASGI *app*, first element outermost."""
    for mw in reversed(middleware):
        spec = to_starlette(mw)
        app = spec.cls(app, *spec.args, **spec.kwargs)
    return app


def to_starlette(middleware: AnyMiddleware) -> StarletteMiddleware:
    """Express a middleware as a Starlette ``Middleware`` spec.

    Specs pass through untouched. Protocol callables are run through
    ``BaseHTTPMiddleware``, whose ``call_next`` has the same shape as
    ``Next``.
    """
    if isinstance(middleware, StarletteMiddleware):
        return middleware
    return StarletteMiddleware(BaseHTTPMiddleware, dispatch=middleware)
