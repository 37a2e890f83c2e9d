"""Explicit mutable cache state for memoizing resources.

A CacheState is a get/set cell holding the key -> value mapping a memoizing
resource has accumulated. One state belongs to one logical scope (typically
one request). Read-modify-write through a state is not atomic: callers
sharing a state across threads or tasks must serialize access themselves.

Backends:
    - MemoryState: the cell is the instance; one instance per scope
    - ContextState: the cell lives in a ContextVar, scoped with ``scope()``
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Generic, Protocol, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_EMPTY: Mapping = MappingProxyType({})


@runtime_checkable
class CacheState(Protocol[K, V]):
    """Get/set capability over a cached mapping."""

    def get(self) -> Mapping[K, V]: ...
    def set(self, cache: Mapping[K, V]) -> None: ...


class MemoryState(Generic[K, V]):
    """Cache state held on the instance.

    Example:
        >>> state = MemoryState()
        >>> state.set({1: "a"})
        >>> dict(state.get())
        {1: 'a'}
    """

    __slots__ = ("_cache",)

    def __init__(self, initial: Mapping[K, V] | None = None) -> None:
        self._cache: Mapping[K, V] = MappingProxyType(dict(initial)) if initial else _EMPTY

    def get(self) -> Mapping[K, V]:
        return self._cache

    def set(self, cache: Mapping[K, V]) -> None:
        self._cache = MappingProxyType(dict(cache))

    def __len__(self) -> int:
        return len(self._cache)


class _Cell(Generic[K, V]):
    """Holder a scope installs once; writes replace its contents, not the ContextVar."""

    __slots__ = ("cache",)

    def __init__(self, cache: Mapping[K, V]) -> None:
        self.cache = cache


class ContextState(Generic[K, V]):
    """Cache state held in a ContextVar, isolated per ``scope()``.

    Each ``scope()`` block installs one cell holding an empty (or seeded)
    cache and discards it on exit, so a web framework can open one scope per
    request. Tasks and threads started inside the block see copies of the
    context that point at the same cell, so their writes are visible to the
    rest of the scope. Outside any scope a write installs a cell in the
    current context only.

    Example:
        >>> state = ContextState("users")
        >>> with state.scope():
        ...     state.set({1: "a"})
        ...     len(state.get())
        1
        >>> len(state.get())
        0
    """

    __slots__ = ("_var",)

    def __init__(self, name: str = "fetchbatch_cache") -> None:
        self._var: ContextVar[_Cell[K, V] | None] = ContextVar(name, default=None)

    def get(self) -> Mapping[K, V]:
        cell = self._var.get()
        return _EMPTY if cell is None else cell.cache

    def set(self, cache: Mapping[K, V]) -> None:
        snapshot = MappingProxyType(dict(cache))
        cell = self._var.get()
        if cell is None:
            self._var.set(_Cell(snapshot))
        else:
            cell.cache = snapshot

    @contextmanager
    def scope(self, initial: Mapping[K, V] | None = None) -> Iterator[ContextState[K, V]]:
        """Run a block against a fresh cache, restoring the outer one afterwards."""
        token = self._var.set(_Cell(MappingProxyType(dict(initial)) if initial else _EMPTY))
        try:
            yield self
        finally:
            self._var.reset(token)

    def __len__(self) -> int:
        return len(self.get())
