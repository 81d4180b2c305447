"""Log level declaration.

``Logger.level(...)`` declares the application's minimum log level. When
applied it updates ``AppConfig.log_level`` and the application logger,
and the level is forwarded to uvicorn when the app is served.

Usage::

    app.setup(
        Logger.level("debug"),
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from trellis.errors import ConfigurationError

# Below DEBUG; uvicorn registers the same name at the same value
TRACE = 5
# Between INFO and WARNING
NOTICE = 25

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(NOTICE, "NOTICE")


class Level(StrEnum):
    """Log levels, lowest to highest."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def value_int(self) -> int:
        """The stdlib ``logging`` level number."""
        return _STDLIB_LEVELS[self]

    @property
    def uvicorn_name(self) -> str:
        """The closest level name uvicorn accepts (it has no ``notice``)."""
        if self is Level.NOTICE:
            return "info"
        return self.value

    @classmethod
    def coerce(cls, value: str | int | Level) -> Level:
        """Accept a ``Level``, a level name, or a stdlib level number."""
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            for level, number in _STDLIB_LEVELS.items():
                if number == value:
                    return level
            msg = f"Unknown log level number: {value}"
            raise ConfigurationError(msg)
        if not isinstance(value, str):
            msg = f"Log level must be a Level, a name or a number, got {type(value).__name__}"
            raise ConfigurationError(msg)
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(level.value for level in cls)
            msg = f"Unknown log level {value!r}. Expected one of: {names}"
            raise ConfigurationError(msg) from None


_STDLIB_LEVELS: dict[Level, int] = {
    Level.TRACE: TRACE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.NOTICE: NOTICE,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.CRITICAL: logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class LoggerLevel:
    """Declares the application's active log level."""

    level: Level

    @property
    def app_content(self) -> LoggerLevel:
        return self


class Logger:
    """Namespace for logger declarations."""

    __slots__ = ()

    @staticmethod
    def level(value: str | int | Level) -> LoggerLevel:
        """Declare the minimum log level."""
        return LoggerLevel(Level.coerce(value))


def log_level(value: str | int | Level) -> LoggerLevel:
    """Shorthand for ``Logger.level(value)``."""
    return Logger.level(value)
