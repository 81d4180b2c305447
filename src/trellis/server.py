"""HTTP server binding declaration.

Only fields that are set are applied; an unset field leaves the
application's current value (and so the default) in place::

    HTTPServer(hostname="0.0.0.0")                   # port untouched
    HTTPServer.from_env(hostname="HOST", port="PORT")  # read at build time
    HTTPServer().with_hostname("0.0.0.0").with_port_env("PORT")

Environment variables are read when the declaration is built, not when
it is applied. A missing hostname variable unsets the hostname; a missing
port variable keeps the port as it was.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace


def _to_port(value: int | str) -> int | None:
    """Coerce a port given as int or numeric string. Non-numeric → None."""
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class HTTPServer:
    """Declares the server hostname and/or port."""

    hostname: str | None = None
    port: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.port, str):
            object.__setattr__(self, "port", _to_port(self.port))

    @property
    def app_content(self) -> HTTPServer:
        return self

    # -- Construction from the environment --

    @classmethod
    def from_env(cls, *, hostname: str | None = None, port: str | None = None) -> HTTPServer:
        """Build from the named environment variables."""
        server = cls()
        if hostname is not None:
            server = server.with_hostname_env(hostname)
        if port is not None:
            server = server.with_port_env(port)
        return server

    # -- Chainable copies --

    def with_hostname(self, value: str) -> HTTPServer:
        return replace(self, hostname=value)

    def with_hostname_env(self, key: str) -> HTTPServer:
        """Take the hostname from *key*. An unset variable unsets the hostname."""
        return replace(self, hostname=os.environ.get(key))

    def with_port(self, value: int | str) -> HTTPServer:
        """Set the port. A non-numeric string leaves the port unset."""
        return replace(self, port=_to_port(value))

    def with_port_env(self, key: str) -> HTTPServer:
        """Take the port from *key*. An unset variable keeps the current port."""
        value = os.environ.get(key)
        if value is None:
            return self
        return replace(self, port=_to_port(value))
