"""Execution drivers for Fetch computations.

    - run: synchronous resource, returns the result directly
    - run_async: async resource, returns a coroutine

Both issue exactly one resolve call per invocation.
"""

from .run import run, run_async

__all__ = ["run", "run_async"]
