"""Tests for the Application facade."""

import logging

import pytest

from trellis.app import Application
from trellis.config import AppConfig
from trellis.logger import Level
from trellis.routing import Routes, get
from trellis.testing import TestClient


async def passthrough(request, next):
    return await next(request)


class TestSetup:
    def test_setup_returns_app(self) -> None:
        app = Application()
        assert app.setup() is app

    def test_custom_config(self) -> None:
        app = Application(AppConfig(port=3000, log_level=Level.DEBUG))
        assert app.config.port == 3000
        assert app.logger.level == logging.DEBUG

    def test_configure_server_ignores_unset_fields(self) -> None:
        app = Application()
        app.configure_server(port=9000)
        app.configure_server()
        assert app.config.host == "127.0.0.1"
        assert app.config.port == 9000

    def test_log_level_accepts_names(self) -> None:
        app = Application()
        app.log_level = "notice"
        assert app.log_level is Level.NOTICE


class TestFreeze:
    def test_starlette_property_compiles_once(self) -> None:
        app = Application().setup(Routes(get("x", handler=lambda: "x")))
        assert app.starlette is app.starlette

    def test_add_route_after_freeze_raises(self) -> None:
        app = Application()
        _ = app.starlette
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.setup(Routes(get("late", handler=lambda: "late")))

    def test_add_middleware_after_freeze_raises(self) -> None:
        app = Application()
        _ = app.starlette
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.add_middleware(passthrough)

    def test_log_level_after_freeze_raises(self) -> None:
        app = Application()
        _ = app.starlette
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.log_level = "debug"
        assert app.log_level is Level.INFO

    def test_configure_server_after_freeze_raises(self) -> None:
        app = Application()
        _ = app.starlette
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.configure_server(port=1)

    async def test_first_request_freezes(self) -> None:
        app = Application().setup(Routes(get("ping", handler=lambda: "pong")))
        async with TestClient(app) as client:
            response = await client.get("/ping")
            assert response.status_code == 200
            assert response.text == "pong"
        with pytest.raises(RuntimeError):
            app.add_middleware(passthrough)


class TestRun:
    def test_run_uses_configured_binding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import uvicorn

        calls: list[tuple[object, dict[str, object]]] = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append((app, kw)))

        app = Application()
        app.configure_server(host="0.0.0.0", port=8123)
        app.log_level = "notice"
        app.run()

        assert calls == [(app, {"host": "0.0.0.0", "port": 8123, "log_level": "info"})]

    def test_run_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import uvicorn

        calls: list[dict[str, object]] = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append(kw))

        Application().run(host="localhost", port=5000)
        assert calls[0]["host"] == "localhost"
        assert calls[0]["port"] == 5000


class TestApplicationMiddleware:
    async def test_app_middleware_order(self) -> None:
        async def outer(request, next):
            response = await next(request)
            response.headers["X-Order"] = response.headers.get("X-Order", "") + "outer"
            return response

        async def inner(request, next):
            response = await next(request)
            response.headers["X-Order"] = "inner,"
            return response

        app = Application().setup(outer, inner, Routes(get("x", handler=lambda: "x")))
        async with TestClient(app) as client:
            response = await client.get("/x")
            assert response.headers["x-order"] == "inner,outer"

    async def test_app_middleware_runs_for_unmatched_paths(self) -> None:
        async def tag(request, next):
            response = await next(request)
            response.headers["X-Tag"] = "seen"
            return response

        app = Application().setup(tag)
        async with TestClient(app) as client:
            response = await client.get("/missing")
            assert response.status_code == 404
            assert response.headers["x-tag"] == "seen"
