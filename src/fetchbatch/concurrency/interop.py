"""Sync/async interoperability.

run_sync drives a coroutine to completion from synchronous code. It handles
the awkward case of being called while an event loop is already running in
this thread (FastAPI handlers, Jupyter) by running the coroutine on a fresh
loop in a helper thread.

Both paths run the coroutine in a copy of the caller's context, so context
variables set by the caller (a ContextState scope, for instance) are visible
to the coroutine.

Example:
    >>> async def lookup() -> dict[int, str]:
    ...     return {1: "a"}
    >>> run_sync(lookup())
    {1: 'a'}
"""

from __future__ import annotations

import asyncio
import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import Coroutine, TypeVar

T = TypeVar("T")


def run_sync(
    coro: Coroutine[object, object, T],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> T:
    """Run async coroutine from synchronous context.

    Args:
        coro: Coroutine to execute
        loop: Idle event loop to run it on instead of a fresh one

    Returns:
        Coroutine result; exceptions propagate unchanged
    """
    if loop is not None:
        return loop.run_until_complete(coro)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    return _run_in_helper_thread(coro)


def _run_in_helper_thread(coro: Coroutine[object, object, T]) -> T:
    """Run coroutine on a new loop in a one-off worker thread and wait for it."""
    ctx = contextvars.copy_context()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="fetchbatch-interop") as pool:
        return pool.submit(ctx.run, asyncio.run, coro).result()
