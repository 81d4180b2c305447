"""Path components and their Starlette path templates.

Declarations use a small component vocabulary::

    "users"     constant     matches the literal segment
    ":id"       parameter    matches one segment, captured as ``id``
    "*"         anything     matches one segment, not captured by name
    "**"        catchall     matches the rest of the path, captured as ``catchall``

Strings may hold several segments (``"api/v1/users"``). Components are
opaque here: they are rendered to a Starlette path template and the
router does the rest.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from trellis.errors import ConfigurationError


class ComponentKind(StrEnum):
    CONSTANT = "constant"
    PARAMETER = "parameter"
    ANYTHING = "anything"
    CATCHALL = "catchall"


@dataclass(frozen=True, slots=True)
class PathComponent:
    """A single declared path segment."""

    kind: ComponentKind
    value: str = ""

    @classmethod
    def parse(cls, segment: str) -> PathComponent:
        """Parse one segment (no slashes)."""
        if segment == "**":
            return CATCHALL
        if segment == "*":
            return ANYTHING
        if segment.startswith(":"):
            name = segment[1:]
            if not name.isidentifier():
                msg = (
                    f"Invalid path parameter {segment!r}: "
                    "expected ':name' with a valid identifier"
                )
                raise ConfigurationError(msg)
            return cls(ComponentKind.PARAMETER, name)
        if "{" in segment or "}" in segment:
            msg = (
                f"Invalid path segment {segment!r}: declare parameters as ':name', "
                f"not '{{name}}'"
            )
            raise ConfigurationError(msg)
        return cls(ComponentKind.CONSTANT, segment)

    def __str__(self) -> str:
        match self.kind:
            case ComponentKind.PARAMETER:
                return f":{self.value}"
            case ComponentKind.ANYTHING:
                return "*"
            case ComponentKind.CATCHALL:
                return "**"
            case _:
                return self.value


ANYTHING = PathComponent(ComponentKind.ANYTHING)
CATCHALL = PathComponent(ComponentKind.CATCHALL)


def parse_path(
    *parts: str | PathComponent | Iterable[str | PathComponent],
) -> tuple[PathComponent, ...]:
    """Normalize declared path parts into a tuple of components.

    Accepts components, strings (split on ``/``, empty segments dropped),
    and iterables of either::

        parse_path("api/v1", ":id")  # constant, constant, parameter
    """
    components: list[PathComponent] = []
    for part in parts:
        if isinstance(part, PathComponent):
            components.append(part)
        elif isinstance(part, str):
            components.extend(PathComponent.parse(s) for s in part.split("/") if s)
        else:
            components.extend(parse_path(*part))
    return tuple(components)


def parameter_names(components: Iterable[PathComponent]) -> list[str]:
    """Names the rendered template captures, in path order.

    ``*`` captures as ``_anything<index>`` and ``**`` as ``catchall``.
    """
    names: list[str] = []
    for index, component in enumerate(components):
        match component.kind:
            case ComponentKind.PARAMETER:
                names.append(component.value)
            case ComponentKind.ANYTHING:
                names.append(f"_anything{index}")
            case ComponentKind.CATCHALL:
                names.append("catchall")
    return names


def render_path(components: Iterable[PathComponent]) -> str:
    """Render components as a Starlette path template.

    ``("api", ":id", "**")`` renders as ``/api/{id}/{catchall:path}``.
    An empty path renders as ``/``.
    """
    segments: list[str] = []
    for index, component in enumerate(components):
        match component.kind:
            case ComponentKind.CONSTANT:
                segments.append(component.value)
            case ComponentKind.PARAMETER:
                segments.append(f"{{{component.value}}}")
            case ComponentKind.ANYTHING:
                segments.append(f"{{_anything{index}}}")
            case ComponentKind.CATCHALL:
                segments.append("{catchall:path}")
    return "/" + "/".join(segments)
