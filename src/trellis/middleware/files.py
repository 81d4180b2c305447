"""Public file serving middleware.

Serves files from a public directory at the path they have on disk,
relative to that directory. Requests that do not name an existing file
fall through to the next handler, so routes and files share one URL
space::

    app.setup(
        FileMiddleware("Public"),
        Routes(get("hello", handler=hello)),
    )

File lookup, conditional requests and path traversal checks are
Starlette's ``StaticFiles``.
"""

from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

from trellis.middleware.protocol import Next


class FileMiddleware:
    """Middleware that serves files from *public_directory* or falls through."""

    __slots__ = ("_directory", "_files")

    def __init__(self, public_directory: str | Path = "Public") -> None:
        self._directory = Path(public_directory).resolve()
        self._files = StaticFiles(directory=self._directory, check_dir=False)

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        relative = request.url.path.lstrip("/")
        # Directories are never served; there is no index file resolution
        if not relative or relative.endswith("/"):
            return await next(request)

        try:
            return await self._files.get_response(relative, request.scope)
        except HTTPException as exc:
            if exc.status_code == 404:
                return await next(request)
            raise
