"""Static site — public files next to dynamic routes.

Demonstrates:
- FileMiddleware serving ./Public at the site root
- Routes and files sharing one URL space (a file wins, a miss falls through)
- Settings pulled from the environment with HTTPServer.from_env

Run:
    cd examples/static_site && python app.py
"""

from pathlib import Path

from starlette.responses import RedirectResponse

from trellis import Application, FileMiddleware, HTTPServer, Logger, Routes, get

PUBLIC = Path(__file__).parent / "Public"


def home() -> RedirectResponse:
    return RedirectResponse("/index.html")


def greet(name: str) -> str:
    return f"Hello, {name}!"


app = Application().setup(
    HTTPServer.from_env(hostname="SITE_HOST", port="SITE_PORT"),
    Logger.level("info"),
    FileMiddleware(PUBLIC),
    Routes(
        get(handler=home),
        get("greet", ":name", handler=greet),
    ),
)

if __name__ == "__main__":
    app.run()
