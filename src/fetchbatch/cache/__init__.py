"""Memoizing resources with explicit, scope-bound cache state.

    - MemoizedResource / AsyncMemoizedResource: resolve each key at most once
    - CacheState: get/set protocol the cache lives behind
    - MemoryState / ContextState: instance-held and ContextVar-held states

The cache never evicts; scope it to one unit of work.
"""

from .memo import AsyncMemoizedResource, CacheStats, MemoizedResource
from .state import CacheState, ContextState, MemoryState

__all__ = [
    "MemoizedResource",
    "AsyncMemoizedResource",
    "CacheStats",
    "CacheState",
    "MemoryState",
    "ContextState",
]
