"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Starlette ``Middleware`` specs and ``CORS`` declarations are accepted
anywhere a middleware is: on the application chain and in route groups.

Built-in declarations:
    CORS -- Declarative Cross-Origin Resource Sharing policy
    FileMiddleware -- Serve files from a public directory
"""

from trellis.middleware.chain import as_middleware, compose, to_starlette
from trellis.middleware.cors import CORS, AllowOrigin
from trellis.middleware.files import FileMiddleware
from trellis.middleware.protocol import AnyMiddleware, Middleware, Next

__all__ = [
    "CORS",
    "AllowOrigin",
    "AnyMiddleware",
    "FileMiddleware",
    "Middleware",
    "Next",
    "as_middleware",
    "compose",
    "to_starlette",
]
