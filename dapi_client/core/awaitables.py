"""Helpers for code that accepts both sync and async callables.

Commands keep their own calling convention: a sync command returns a plain value,
an async one returns an awaitable. `resolved` covers the places where an async
override requires an awaitable but there is nothing left to wait for.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def resolved(value: T) -> T:
    """Coroutine that completes immediately with `value`.

    A coroutine rather than a bare awaitable, so `asyncio.run` and
    `asyncio.create_task` accept it like any other async result.
    """
    return value


def is_async_callable(fn: Callable[..., Any] | None) -> bool:
    if fn is None:
        return False
    if inspect.iscoroutinefunction(fn):
        return True
    call = getattr(fn, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)
