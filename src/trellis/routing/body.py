"""Request body strategies.

An endpoint either collects its body into memory before the handler runs
(up to a maximum size) or leaves the body to be streamed by the handler.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from trellis.errors import ConfigurationError

_UNITS: dict[str, int] = {
    "": 1,
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}

_BYTE_COUNT = re.compile(r"^\s*(\d+)\s*([a-z]*)\s*$")


def parse_byte_count(value: int | str) -> int:
    """Parse ``16384``, ``"16kb"``, ``"1mb"`` or ``"2gb"`` into bytes.

    Units are binary multiples and case-insensitive.

    Raises:
        ConfigurationError: If *value* is negative or not a byte count.
    """
    if isinstance(value, int):
        if value < 0:
            msg = f"Byte count must not be negative, got {value}"
            raise ConfigurationError(msg)
        return value
    match = _BYTE_COUNT.match(value.lower())
    if match is None or match.group(2) not in _UNITS:
        msg = f"Invalid byte count {value!r}. Use an int or a string like '16kb' or '1mb'."
        raise ConfigurationError(msg)
    return int(match.group(1)) * _UNITS[match.group(2)]


@dataclass(frozen=True, slots=True)
class BodyStrategy:
    """How an endpoint receives its request body.

    ``max_size=None`` defers to ``AppConfig.max_body_size`` at request time.
    """

    streaming: bool = False
    max_size: int | None = None

    @classmethod
    def collect(cls, max_size: int | str | None = None) -> BodyStrategy:
        """Collect the body into memory before calling the handler."""
        if max_size is None:
            return COLLECT
        return cls(streaming=False, max_size=parse_byte_count(max_size))

    @classmethod
    def stream(cls) -> BodyStrategy:
        """Leave the body unread; the handler streams it."""
        return STREAM


COLLECT = BodyStrategy()
STREAM = BodyStrategy(streaming=True)
