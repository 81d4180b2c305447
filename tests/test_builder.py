"""Tests for trellis.builder — composing declarations into one Item."""

from trellis.builder import AppBuilder, block, either, optional
from trellis.items import NOTHING, Items, Use, leaves
from trellis.logger import Level, Logger
from trellis.server import HTTPServer


async def first_mw(request, next):
    return await next(request)


async def second_mw(request, next):
    return await next(request)


class TestBlock:
    def test_empty_block_is_nothing(self) -> None:
        assert block() is NOTHING

    def test_single_declaration_is_wrapped(self) -> None:
        server = HTTPServer(port=8080)
        assert block(server) == Items((server,))

    def test_order_is_preserved(self) -> None:
        declarations = [
            HTTPServer(hostname="a"),
            first_mw,
            Logger.level("debug"),
            second_mw,
            HTTPServer(port=9000),
        ]
        tree = block(*declarations)

        assert list(leaves(tree)) == [
            HTTPServer(hostname="a"),
            Use(first_mw),
            Logger.level(Level.DEBUG),
            Use(second_mw),
            HTTPServer(port=9000),
        ]

    def test_nested_blocks_flatten_in_order(self) -> None:
        tree = block(
            HTTPServer(port=1),
            block(HTTPServer(port=2), block(), block(HTTPServer(port=3))),
            HTTPServer(port=4),
        )
        assert [leaf.port for leaf in leaves(tree)] == [1, 2, 3, 4]


class TestOptional:
    def test_present(self) -> None:
        server = HTTPServer(port=8080)
        assert optional(server) == Items((server,))

    def test_absent(self) -> None:
        assert optional(None) is NOTHING


class TestEither:
    def test_first_branch(self) -> None:
        tree = either(True, HTTPServer(port=1), HTTPServer(port=2))
        assert tree == Items((HTTPServer(port=1),))

    def test_second_branch(self) -> None:
        tree = either(False, HTTPServer(port=1), HTTPServer(port=2))
        assert tree == Items((HTTPServer(port=2),))

    def test_untaken_branch_leaves_no_trace(self) -> None:
        tree = either(True, first_mw, second_mw)
        assert Use(second_mw) not in list(leaves(tree))


class TestAppBuilder:
    def test_empty_builder_is_nothing(self) -> None:
        assert AppBuilder().build() is NOTHING
        assert AppBuilder().app_content is NOTHING

    def test_add_chains(self) -> None:
        builder = AppBuilder(HTTPServer(port=1)).add(first_mw).add(HTTPServer(port=2))
        assert len(builder) == 3
        assert list(leaves(builder.build())) == [
            HTTPServer(port=1),
            Use(first_mw),
            HTTPServer(port=2),
        ]

    def test_add_if_true(self) -> None:
        builder = AppBuilder().add_if(True, first_mw)
        assert list(leaves(builder.build())) == [Use(first_mw)]

    def test_add_if_false_adds_nothing_observable(self) -> None:
        builder = AppBuilder().add_if(False, first_mw)
        assert list(leaves(builder.build())) == []

    def test_add_either(self) -> None:
        builder = AppBuilder().add_either(False, first_mw, second_mw)
        assert list(leaves(builder.build())) == [Use(second_mw)]

    def test_builder_nests_inside_block(self) -> None:
        inner = AppBuilder(HTTPServer(port=2))
        tree = block(HTTPServer(port=1), inner, HTTPServer(port=3))
        assert [leaf.port for leaf in leaves(tree)] == [1, 2, 3]
