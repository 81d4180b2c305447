"""Async test client for trellis applications.

Sends requests through the ASGI interface with httpx — no sockets
involved. Server errors come back as 500 responses instead of being
re-raised, so tests observe exactly what a client would.
"""

from __future__ import annotations

from typing import Any

import httpx

from trellis.app import Application


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for trellis applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status_code == 200
    """

    __slots__ = ("_client", "app")

    def __init__(self, app: Application, base_url: str = "http://testserver") -> None:
        self.app = app
        self._client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app, raise_app_exceptions=False),
            base_url=base_url,
        )

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request with any method. Keyword arguments go to httpx."""
        return await self._client.request(method, path, **kwargs)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a PATCH request."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, **kwargs)
