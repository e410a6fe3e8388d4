"""Invoke helper — call sync or async handlers through one await.

Wren handlers can be ``def`` or ``async def``. The dispatcher always
awaits the result of ``invoke()``, so the sync/async check lives in
exactly one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
