"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The same callable works on the application
chain (where Starlette hands it a ``starlette.requests.Request``) and on
a route group (where it receives a ``trellis.http.request.Request``, a
subclass, unless a Starlette spec sits between it and the endpoint).
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from starlette.middleware import Middleware as StarletteMiddleware
from starlette.requests import Request
from starlette.responses import Response

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for trellis middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            response.headers["X-Time"] = f"{time.monotonic() - start:.3f}"
            return response

        # Class middleware
        class RequireToken:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


# Anything accepted on a middleware chain: a protocol callable or a
# Starlette ``Middleware`` spec
type AnyMiddleware = Middleware | StarletteMiddleware
