"""Manual configuration — the escape hatch.

Runs an arbitrary callback against the live application during setup,
for anything the declarations do not cover::

    @ManualConfiguration
    def sessions(app: Application) -> None:
        app.add_middleware(Middleware(SessionMiddleware, secret_key=KEY))

The callback may raise. The exception propagates unchanged out of
``Application.setup()`` and the rest of the declaration is skipped.
Directives applied before the failure stay applied.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trellis.app import Application


@dataclass(frozen=True, slots=True)
class ManualConfiguration:
    """Declares a callback to run against the application."""

    handler: Callable[[Application], None]

    @property
    def app_content(self) -> ManualConfiguration:
        return self
