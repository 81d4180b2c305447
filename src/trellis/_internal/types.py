"""Shared type aliases used across trellis modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Endpoint handler: sync or async, variable signature
Handler: TypeAlias = Callable[..., Any]
