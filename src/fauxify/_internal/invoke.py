"""Invoke helpers: tell sync and async callables apart, call them uniformly.

Declarative handlers and plugins are dispatched differently depending on
whether they are ``async def``. The check lives here so every caller
agrees on what "async" means.

Usage::

    from fauxify._internal.invoke import invoke, is_async_callable

    if is_async_callable(handler):
        await handler(request, reply)
"""

import functools
import inspect
from typing import Any


def is_async_callable(func: Any) -> bool:
    """True for ``async def`` functions, including partials and callable objects."""
    while isinstance(func, functools.partial):
        func = func.func
    if inspect.iscoroutinefunction(func):
        return True
    call = getattr(func, "__call__", None)
    return inspect.iscoroutinefunction(call)


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
