"""Trellis exception hierarchy.

Declarations raise ``ConfigurationError`` while the tree is being built.
Failures inside a manual configuration callback are never wrapped: they
propagate to the caller of ``Application.setup()`` exactly as raised.
"""

from starlette.exceptions import HTTPException


class TrellisError(Exception):
    """Base for all trellis-specific errors."""


class ConfigurationError(TrellisError):
    """Raised when a declaration is invalid.

    Typically raised while building the tree (bad path component, bad
    byte count, unknown log level), before anything touches the app.
    """


class PayloadTooLarge(TrellisError, HTTPException):  # noqa: N818
    """413 — the request body exceeds the endpoint's collection limit.

    Raised while collecting a body. Starlette's exception middleware turns
    it into a 413 response for that request; other requests and the
    application itself are unaffected.
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        HTTPException.__init__(
            self,
            status_code=413,
            detail=f"Request body exceeds the {limit} byte limit",
        )
