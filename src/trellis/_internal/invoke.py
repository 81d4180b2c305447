"""Invoke helpers — call sync or async handlers uniformly.

Endpoint handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler must handle both cases. Sync handlers run in an
anyio worker thread so a blocking handler does not stall the event loop.

Usage::

    from trellis._internal.invoke import invoke

    result = await invoke(handler, request=request)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result.

    Coroutine functions are awaited directly. Plain functions run in a
    worker thread; if one returns an awaitable anyway, it is awaited too.
    """
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
