"""Request with bounded body collection.

Subclasses Starlette's ``Request``. Collecting stores the body the same
way ``Request.body()`` caches it, so after ``collect()`` every Starlette
body accessor (``body()``, ``json()``, ``form()``, ``stream()``) replays
the collected bytes instead of reading the connection again.
"""

from starlette.requests import Request as StarletteRequest

from trellis.errors import PayloadTooLarge


class Request(StarletteRequest):
    """An HTTP request whose body can be collected up to a limit."""

    @property
    def is_collected(self) -> bool:
        """True once the full body has been read into memory."""
        return hasattr(self, "_body")

    @property
    def declared_length(self) -> int | None:
        """The Content-Length header as int, if present and valid."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def collect(self, max_size: int) -> bytes:
        """Read the whole body, failing once it exceeds *max_size* bytes.

        A declared Content-Length over the limit is rejected before any
        of the body is read.

        Raises:
            PayloadTooLarge: If the body is larger than *max_size*.
        """
        if self.is_collected:
            return self._body

        declared = self.declared_length
        if declared is not None and declared > max_size:
            raise PayloadTooLarge(max_size)

        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if size > max_size:
                raise PayloadTooLarge(max_size)
            chunks.append(chunk)

        self._body = b"".join(chunks)
        return self._body
