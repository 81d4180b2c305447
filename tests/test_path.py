"""Tests for path components and their Starlette templates."""

import pytest

from trellis.errors import ConfigurationError
from trellis.routing.path import (
    ANYTHING,
    CATCHALL,
    ComponentKind,
    PathComponent,
    parameter_names,
    parse_path,
    render_path,
)


class TestPathComponentParse:
    def test_constant(self) -> None:
        assert PathComponent.parse("users") == PathComponent(ComponentKind.CONSTANT, "users")

    def test_parameter(self) -> None:
        assert PathComponent.parse(":id") == PathComponent(ComponentKind.PARAMETER, "id")

    def test_anything(self) -> None:
        assert PathComponent.parse("*") is ANYTHING

    def test_catchall(self) -> None:
        assert PathComponent.parse("**") is CATCHALL

    def test_bare_colon_is_invalid(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid path parameter"):
            PathComponent.parse(":")

    def test_non_identifier_parameter_is_invalid(self) -> None:
        with pytest.raises(ConfigurationError):
            PathComponent.parse(":user-id")

    def test_brace_syntax_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="':name'"):
            PathComponent.parse("{id}")

    def test_str_round_trips_declaration(self) -> None:
        for segment in ("users", ":id", "*", "**"):
            assert str(PathComponent.parse(segment)) == segment


class TestParsePath:
    def test_splits_on_slash_and_drops_empty_segments(self) -> None:
        assert parse_path("/api//v1/") == (
            PathComponent(ComponentKind.CONSTANT, "api"),
            PathComponent(ComponentKind.CONSTANT, "v1"),
        )

    def test_mixed_parts(self) -> None:
        path = parse_path("api", PathComponent.parse(":id"), ["files", "**"])
        assert [str(c) for c in path] == ["api", ":id", "files", "**"]

    def test_no_parts(self) -> None:
        assert parse_path() == ()

    def test_duplicates_are_kept(self) -> None:
        assert len(parse_path("a", "a")) == 2


class TestRenderPath:
    def test_empty_is_root(self) -> None:
        assert render_path(()) == "/"

    def test_constants(self) -> None:
        assert render_path(parse_path("api/v1/users")) == "/api/v1/users"

    def test_parameter(self) -> None:
        assert render_path(parse_path("users", ":id")) == "/users/{id}"

    def test_anything_gets_positional_name(self) -> None:
        assert render_path(parse_path("a", "*", "b", "*")) == "/a/{_anything1}/b/{_anything3}"

    def test_catchall(self) -> None:
        assert render_path(parse_path("static", "**")) == "/static/{catchall:path}"


class TestParameterNames:
    def test_names_in_path_order(self) -> None:
        names = parameter_names(parse_path("a", ":id", "*", "**"))
        assert names == ["id", "_anything2", "catchall"]

    def test_constants_capture_nothing(self) -> None:
        assert parameter_names(parse_path("api/v1")) == []
