"""Invoke helper — call sync or async handlers uniformly.

Pipeline handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler goes through this helper so the sync/async
check lives in exactly one place.

Usage::

    from switchyard._internal.invoke import invoke

    await invoke(handler, request, response, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
