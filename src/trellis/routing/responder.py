"""Endpoint responder — the ASGI app registered for each declared endpoint.

The only routing component that touches raw ASGI. Builds a trellis
``Request``, runs the group middleware chain, collects the body when the
endpoint asks for it, calls the handler and sends the encoded result.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from starlette.requests import Request as StarletteRequest
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from trellis._internal.invoke import invoke
from trellis.http.negotiation import encode_response
from trellis.http.request import Request
from trellis.middleware.chain import compose, split_innermost, wrap_asgi
from trellis.middleware.protocol import AnyMiddleware, Next
from trellis.routing.body import COLLECT

if TYPE_CHECKING:
    from trellis.app import Application
    from trellis.routing.endpoint import Endpoint


class EndpointResponder:
    """ASGI app serving one endpoint behind its group middleware."""

    __slots__ = ("_app", "_asgi", "_endpoint", "_pipeline", "_signature")

    def __init__(
        self,
        app: Application,
        endpoint: Endpoint,
        middleware: tuple[AnyMiddleware, ...] = (),
    ) -> None:
        self._app = app
        self._endpoint = endpoint
        self._signature = _signature(endpoint.handler)
        outer, inner = split_innermost(middleware)
        self._pipeline: Next = compose(inner, self._respond)
        self._asgi: ASGIApp = wrap_asgi(outer, self._serve)

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._asgi(scope, receive, send)

    async def _serve(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive, send)
        response = await self._pipeline(request)
        await response(scope, receive, send)

    async def _respond(self, request: Request) -> Response:
        strategy = self._endpoint.body or COLLECT
        if not strategy.streaming and not request.is_collected:
            limit = strategy.max_size
            if limit is None:
                limit = self._app.config.max_body_size
            await request.collect(limit)

        kwargs = _build_handler_kwargs(self._signature, request)
        result = await invoke(self._endpoint.handler, **kwargs)
        return encode_response(result)


def _build_handler_kwargs(signature: inspect.Signature, request: Request) -> dict[str, Any]:
    """Build kwargs from the handler signature.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to the annotated type when possible)
    """
    kwargs: dict[str, Any] = {}
    path_params = request.path_params

    for name, param in signature.parameters.items():
        annotation = param.annotation
        if name == "request" or _is_request_type(annotation):
            kwargs[name] = request
        elif name in path_params:
            value = path_params[name]
            if annotation is not inspect.Parameter.empty and callable(annotation):
                try:
                    kwargs[name] = annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs


def _is_request_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, StarletteRequest)


def _signature(handler: Any) -> inspect.Signature:
    """Handler signature with string annotations resolved where possible."""
    try:
        return inspect.signature(handler, eval_str=True)
    except NameError:
        # Annotation names only importable under TYPE_CHECKING
        return inspect.signature(handler)
