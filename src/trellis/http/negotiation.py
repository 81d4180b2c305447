"""Response encoding — maps handler return values to Starlette responses.

isinstance-based dispatch, no magic, fully predictable.
"""

import dataclasses
from typing import Any

from starlette.responses import JSONResponse, PlainTextResponse, Response


def encode_response(value: Any) -> Response:
    """Convert an endpoint handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``None``                -> 204, empty body
    3. ``str``                 -> 200, text/plain
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. dataclass instance      -> 200, application/json of its fields
    7. ``(value, int)``        -> encode value, override status
    8. ``(value, int, dict)``  -> encode value, override status + add headers

    Raises:
        TypeError: If the value has no response encoding.
    """
    match value:
        case Response():
            return value
        case None:
            return Response(status_code=204)
        case str():
            return PlainTextResponse(value)
        case bytes():
            return Response(value, media_type="application/octet-stream")
        case dict() | list():
            return JSONResponse(value)
        case (inner, int() as status):
            response = encode_response(inner)
            response.status_code = status
            return response
        case (inner, int() as status, dict() as headers):
            response = encode_response(inner)
            response.status_code = status
            for name, header_value in headers.items():
                response.headers[name] = header_value
            return response
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return JSONResponse(dataclasses.asdict(value))
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, a dataclass instance, None, "
                f"or a starlette Response."
            )
            raise TypeError(msg)
