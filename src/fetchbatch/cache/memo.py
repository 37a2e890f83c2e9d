"""Memoizing resources: fetch each key at most once per cache scope.

MemoizedResource wraps another resource and a CacheState. On resolve:

1. read the current cache
2. compute the requested keys not yet cached
3. resolve only those through the inner resource
4. merge, keeping existing cache entries on collision
5. write the merged mapping back
6. return the merged mapping (a superset of the request)

The cache only grows. There is no eviction and no TTL: a memoized resource
is meant to live as long as one unit of work (e.g. one request), and
bounding that lifetime is the caller's job. Concurrent callers sharing one
state without their own locking get undefined results.

Example:
    >>> from fetchbatch.resource import as_resource
    >>> @as_resource
    ... def users(ids):
    ...     return {i: f"user-{i}" for i in ids}
    >>> cached = MemoizedResource(users)
    >>> sorted(cached.resolve(frozenset({1, 2})))
    [1, 2]
    >>> sorted(cached.resolve(frozenset({2, 3})))  # inner sees only {3}
    [1, 2, 3]
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from fetchbatch.foundation.config import get_settings
from fetchbatch.resource import AsyncResource, Resource, resource_name

from .state import CacheState, MemoryState

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger("fetchbatch.cache")


@dataclass(slots=True)
class CacheStats:
    """Counters for one memoizing resource."""
    hits: int = 0
    misses: int = 0
    inner_calls: int = 0
    size: int = 0

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.requests if self.requests else 0.0


class _Memo(Generic[K, V]):
    """Shared bookkeeping for the sync and async memoizing resources."""

    __slots__ = ("_state", "_skip_empty", "_hits", "_misses", "_inner_calls")

    def __init__(self, state: CacheState[K, V] | None, skip_empty: bool | None) -> None:
        self._state: CacheState[K, V] = state if state is not None else MemoryState()
        self._skip_empty = get_settings().runtime.skip_empty_resolve if skip_empty is None else skip_empty
        self._hits = self._misses = self._inner_calls = 0

    @property
    def state(self) -> CacheState[K, V]:
        return self._state

    def _plan(self, keys: frozenset[K]) -> tuple[Mapping[K, V], frozenset[K], bool]:
        """Snapshot the cache, work out which requested keys are missing and whether to call inner."""
        cached = self._state.get()
        missing = frozenset(k for k in keys if k not in cached)
        return cached, missing, bool(missing) or not self._skip_empty

    def _commit(self, cached: Mapping[K, V], fresh: Mapping[K, V], keys: frozenset[K], missing: frozenset[K],
                called: bool, name: str) -> dict[K, V]:
        """Merge fresh values under the cache (cached entries win), store the result and count it."""
        merged = {**fresh, **cached}
        self._state.set(merged)
        self._hits += len(keys) - len(missing)
        self._misses += len(missing)
        self._inner_calls += int(called)
        logger.debug("%s: %d requested, %d cached, %d fetched, cache size %d",
                     name, len(keys), len(keys) - len(missing), len(missing), len(merged))
        return merged

    def stats(self) -> CacheStats:
        """Get cache statistics for monitoring.

        Only resolves that completed are counted; a failing inner call leaves
        the counters as they were.
        """
        return CacheStats(self._hits, self._misses, self._inner_calls, len(self._state.get()))


class MemoizedResource(_Memo[K, V]):
    """Resource decorator adding a persistent, grow-only cache.

    Args:
        inner: Resource that resolves cache misses
        state: Where the cache lives (defaults to a private MemoryState)
        skip_empty: Skip the inner call when every key is cached
            (defaults to settings.runtime.skip_empty_resolve)
    """

    __slots__ = ("inner",)

    def __init__(
        self,
        inner: Resource[K, V],
        state: CacheState[K, V] | None = None,
        *,
        skip_empty: bool | None = None,
    ) -> None:
        super().__init__(state, skip_empty)
        self.inner = inner

    @property
    def name(self) -> str:
        return f"memoized({resource_name(self.inner)})"

    def resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        cached, missing, call = self._plan(keys)
        fresh: Mapping[K, V] = self.inner.resolve(missing) if call else {}
        return self._commit(cached, fresh, keys, missing, call, self.name)


class AsyncMemoizedResource(_Memo[K, V]):
    """AsyncResource decorator adding a persistent, grow-only cache.

    Same semantics as MemoizedResource. The state is read before awaiting the
    inner call and written after it, so overlapping resolves on one state
    must be serialized by the caller.
    """

    __slots__ = ("inner",)

    def __init__(
        self,
        inner: AsyncResource[K, V],
        state: CacheState[K, V] | None = None,
        *,
        skip_empty: bool | None = None,
    ) -> None:
        super().__init__(state, skip_empty)
        self.inner = inner

    @property
    def name(self) -> str:
        return f"memoized({resource_name(self.inner)})"

    async def resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        cached, missing, call = self._plan(keys)
        fresh: Mapping[K, V] = await self.inner.resolve(missing) if call else {}
        return self._commit(cached, fresh, keys, missing, call, self.name)
