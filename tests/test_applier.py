"""Tests for the applier — one side effect per leaf, in declaration order."""

import pytest
from starlette.middleware import Middleware
from starlette.middleware.gzip import GZipMiddleware

from trellis.app import Application
from trellis.applier import apply
from trellis.builder import block, either, optional
from trellis.items import NOTHING, Items, Use
from trellis.logger import Level, Logger
from trellis.manual import ManualConfiguration
from trellis.routing import Routes, get
from trellis.server import HTTPServer


async def first_mw(request, next):
    return await next(request)


async def second_mw(request, next):
    return await next(request)


class TestApplyLeaves:
    def test_nothing_has_no_effect(self) -> None:
        app = Application()
        apply(NOTHING, app)
        assert app.middleware == ()
        assert app.routes == ()
        assert app.config.host == "127.0.0.1"

    def test_use_registers_middleware(self) -> None:
        app = Application()
        apply(Use(first_mw), app)
        assert app.middleware == (first_mw,)

    def test_starlette_spec_registers_untouched(self) -> None:
        spec = Middleware(GZipMiddleware)
        app = Application().setup(spec)
        assert app.middleware == (spec,)

    def test_server(self) -> None:
        app = Application()
        apply(HTTPServer(hostname="0.0.0.0", port=8081), app)
        assert (app.config.host, app.config.port) == ("0.0.0.0", 8081)

    def test_logger(self) -> None:
        app = Application()
        apply(Logger.level("warning"), app)
        assert app.log_level is Level.WARNING

    def test_manual_receives_app(self) -> None:
        seen: list[Application] = []
        app = Application()
        apply(ManualConfiguration(seen.append), app)
        assert seen == [app]

    def test_routes(self) -> None:
        app = Application()
        apply(Routes(get("health", handler=lambda: "ok")), app)
        assert [(r.method, r.path) for r in app.routes] == [("GET", "/health")]

    def test_non_item_is_rejected(self) -> None:
        with pytest.raises(TypeError, match="Cannot apply"):
            apply("middleware", Application())  # type: ignore[arg-type]


class TestApplyOrder:
    def test_middleware_registered_in_declaration_order(self) -> None:
        app = Application().setup(first_mw, HTTPServer(port=1), second_mw)
        assert app.middleware == (first_mw, second_mw)

    def test_nested_composites_apply_depth_first(self) -> None:
        order: list[str] = []
        tree = Items(
            (
                ManualConfiguration(lambda app: order.append("a")),
                Items(
                    (
                        ManualConfiguration(lambda app: order.append("b")),
                        NOTHING,
                        ManualConfiguration(lambda app: order.append("c")),
                    )
                ),
                ManualConfiguration(lambda app: order.append("d")),
            )
        )
        apply(tree, Application())
        assert order == ["a", "b", "c", "d"]

    def test_conditional_composition(self) -> None:
        debug = False
        app = Application().setup(
            optional(first_mw if debug else None),
            either(debug, Logger.level("debug"), Logger.level("error")),
        )
        assert app.middleware == ()
        assert app.log_level is Level.ERROR

    def test_empty_setup(self) -> None:
        app = Application().setup()
        assert app.middleware == ()


class TestManualFailure:
    def test_exception_propagates_verbatim(self) -> None:
        error = ValueError("boom")

        def fail(app: Application) -> None:
            raise error

        with pytest.raises(ValueError, match="boom") as info:
            Application().setup(ManualConfiguration(fail))
        assert info.value is error

    def test_earlier_effects_stay_applied(self) -> None:
        def fail(app: Application) -> None:
            raise RuntimeError("setup failed")

        app = Application()
        with pytest.raises(RuntimeError, match="setup failed"):
            app.setup(
                first_mw,
                HTTPServer(port=9000),
                ManualConfiguration(fail),
                second_mw,
            )

        assert app.middleware == (first_mw,)
        assert app.config.port == 9000

    def test_decorator_form(self) -> None:
        @ManualConfiguration
        def configure(app: Application) -> None:
            app.configure_server(port=4321)

        app = Application().setup(block(configure))
        assert app.config.port == 4321
