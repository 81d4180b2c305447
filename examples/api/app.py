"""Books API — a JSON API declared in one place.

Demonstrates:
- HTTPServer bound from the environment (BOOKS_HOST / BOOKS_PORT)
- Conditional declarations with AppBuilder (request timing only in debug)
- CORS with explicit origins
- A protected route group with nested groups and per-endpoint body limits
- ManualConfiguration for a Starlette middleware the declarations don't cover

Run:
    cd examples/api && python app.py
"""

import os
import threading
import time
from dataclasses import dataclass

from starlette.middleware import Middleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import JSONResponse, Response

from trellis import (
    CORS,
    AppBuilder,
    Application,
    BodyStrategy,
    HTTPServer,
    Logger,
    ManualConfiguration,
    Next,
    Request,
    Routes,
    delete,
    get,
    group,
    post,
)

DEBUG = os.environ.get("BOOKS_DEBUG", "") == "1"
API_TOKEN = os.environ.get("BOOKS_TOKEN", "letmein")


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Book:
    id: int
    title: str
    author: str


_lock = threading.Lock()
_books: dict[int, Book] = {
    1: Book(1, "A Wizard of Earthsea", "Ursula K. Le Guin"),
    2: Book(2, "Kindred", "Octavia E. Butler"),
}
_next_id = 3


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def timing(request: Request, next: Next) -> Response:
    """Add X-Response-Time to every response."""
    start = time.monotonic()
    response = await next(request)
    response.headers["X-Response-Time"] = f"{time.monotonic() - start:.3f}s"
    return response


async def require_token(request: Request, next: Next) -> Response:
    """Reject requests without the bearer token."""
    if request.headers.get("authorization") != f"Bearer {API_TOKEN}":
        return JSONResponse({"error": "unauthorized"}, status_code=401)
    return await next(request)


@ManualConfiguration
def compression(app: Application) -> None:
    app.add_middleware(Middleware(GZipMiddleware, minimum_size=1024))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def health() -> str:
    return "ok"


def list_books() -> list[dict]:
    with _lock:
        return [{"id": b.id, "title": b.title, "author": b.author} for b in _books.values()]


def show_book(id: int) -> Book | tuple[dict, int]:
    with _lock:
        book = _books.get(id)
    if book is None:
        return {"error": "not found"}, 404
    return book


async def create_book(request: Request) -> tuple[Book, int, dict[str, str]]:
    global _next_id
    data = await request.json()
    with _lock:
        book = Book(_next_id, data["title"], data["author"])
        _books[book.id] = book
        _next_id += 1
    return book, 201, {"Location": f"/api/books/{book.id}"}


def remove_book(id: int) -> None:
    with _lock:
        _books.pop(id, None)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

setup = AppBuilder(
    HTTPServer(port=8000)
    .with_hostname_env("BOOKS_HOST")
    .with_port_env("BOOKS_PORT"),
    Logger.level("debug" if DEBUG else "info"),
)
setup.add_if(DEBUG, timing)
setup.add(
    CORS().allowed_origin("https://books.example.com").allow_credentials(),
    compression,
    Routes(
        get("health", handler=health),
        group(
            "api",
            routes=[
                get("books", handler=list_books),
                get("books", ":id", handler=show_book),
                group(
                    "books",
                    protected_by=[require_token],
                    routes=[
                        post(handler=create_book, body=BodyStrategy.collect("4kb")),
                        delete(":id", handler=remove_book),
                    ],
                ),
            ],
        ),
    ),
)

app = Application().setup(setup)

if __name__ == "__main__":
    app.run()
