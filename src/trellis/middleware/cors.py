"""Declarative CORS.

Builds a Starlette ``CORSMiddleware`` spec from chainable settings. Each
setting returns a new ``CORS`` value, so a base policy can be shared::

    api_cors = CORS().allowed_origin("https://example.com").allow_credentials()

    app.setup(
        api_cors.allowed_methods("GET", "POST"),
    )

Defaults mirror a permissive API policy: the request's own origin is
echoed back, the common REST methods and headers are allowed,
credentials are off, and preflight responses are cached for 10 minutes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from starlette.middleware import Middleware as StarletteMiddleware
from starlette.middleware.cors import CORSMiddleware

from trellis.items import Use


class AllowOrigin(StrEnum):
    """Origin policies that are not an explicit list of origins."""

    ALL = "*"
    NONE = "none"
    ORIGIN_BASED = "origin-based"


@dataclass(frozen=True, slots=True)
class CORS:
    """CORS middleware declaration."""

    origins: AllowOrigin | tuple[str, ...] = AllowOrigin.ORIGIN_BASED
    methods: tuple[str, ...] = ("GET", "POST", "PUT", "OPTIONS", "DELETE", "PATCH")
    headers: tuple[str, ...] = (
        "Accept",
        "Authorization",
        "Content-Type",
        "Origin",
        "X-Requested-With",
    )
    credentials: bool = False
    max_age: int = 600  # 10 minutes
    expose: tuple[str, ...] = ()

    # -- Chainable settings --

    def allowed_origin(self, *origins: str | AllowOrigin) -> CORS:
        """Set which origins are allowed.

        Pass one ``AllowOrigin`` policy, or one or more origin strings.
        """
        if len(origins) == 1 and isinstance(origins[0], AllowOrigin):
            return replace(self, origins=origins[0])
        if len(origins) == 1 and origins[0] == "*":
            return replace(self, origins=AllowOrigin.ALL)
        return replace(self, origins=tuple(str(origin) for origin in origins))

    def allowed_methods(self, *methods: str) -> CORS:
        """Methods listed in preflight responses."""
        return replace(self, methods=tuple(m.upper() for m in methods))

    def allowed_headers(self, *headers: str) -> CORS:
        """Request headers a CORS request may carry."""
        return replace(self, headers=headers)

    def allow_credentials(self, value: bool = True) -> CORS:
        """Send ``Access-Control-Allow-Credentials`` for CORS requests."""
        return replace(self, credentials=value)

    def cache_expiration(self, seconds: int) -> CORS:
        """How long clients may cache a preflight response."""
        return replace(self, max_age=seconds)

    def exposed_headers(self, *headers: str) -> CORS:
        """Response headers exposed to the calling script."""
        return replace(self, expose=headers)

    # -- Lowering --

    def to_middleware(self) -> StarletteMiddleware:
        """The Starlette ``Middleware`` spec for this policy."""
        origin_options: dict[str, object]
        match self.origins:
            case AllowOrigin.ALL:
                origin_options = {"allow_origins": ["*"]}
            case AllowOrigin.NONE:
                origin_options = {"allow_origins": []}
            case AllowOrigin.ORIGIN_BASED:
                origin_options = {"allow_origin_regex": ".*"}
            case origins:
                origin_options = {"allow_origins": list(origins)}
        return StarletteMiddleware(
            CORSMiddleware,
            allow_methods=list(self.methods),
            allow_headers=list(self.headers),
            allow_credentials=self.credentials,
            expose_headers=list(self.expose),
            max_age=self.max_age,
            **origin_options,
        )

    @property
    def app_content(self) -> Use:
        return Use(self.to_middleware())
