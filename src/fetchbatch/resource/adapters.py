"""Adapters that turn plain batch functions into resources.

Example:
    >>> @as_resource
    ... def users(ids: frozenset[int]) -> dict[int, str]:
    ...     return {i: f"user-{i}" for i in ids}
    >>> users.resolve(frozenset({1}))
    {1: 'user-1'}

    >>> @as_resource(name="profiles")
    ... async def profiles(ids: frozenset[int]) -> dict[int, dict]:
    ...     return await db.load_profiles(ids)
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Hashable, Mapping
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar, overload

from fetchbatch.concurrency import run_sync

from .protocol import AsyncResource, resource_name

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

BatchFn = Callable[[frozenset[K]], Mapping[K, V]]
AsyncBatchFn = Callable[[frozenset[K]], Awaitable[Mapping[K, V]]]


@dataclass(frozen=True, slots=True)
class FunctionResource(Generic[K, V]):
    """Resource backed by a synchronous batch function."""

    fn: BatchFn[K, V]
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", getattr(self.fn, "__name__", "function"))

    def resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        return self.fn(keys)


@dataclass(frozen=True, slots=True)
class AsyncFunctionResource(Generic[K, V]):
    """AsyncResource backed by a coroutine batch function."""

    fn: AsyncBatchFn[K, V]
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", getattr(self.fn, "__name__", "function"))

    async def resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        return await self.fn(keys)


@dataclass(frozen=True, slots=True)
class BlockingResource(Generic[K, V]):
    """Expose an AsyncResource through the synchronous Resource contract.

    Each resolve drives the inner coroutine to completion with run_sync, so
    a synchronous ``run`` still issues exactly one inner call.
    """

    inner: AsyncResource[K, V]

    @property
    def name(self) -> str:
        return resource_name(self.inner)

    def resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        return run_sync(self._resolve(keys))

    async def _resolve(self, keys: frozenset[K]) -> Mapping[K, V]:
        return await self.inner.resolve(keys)


@overload
def as_resource(fn: BatchFn[K, V], /) -> FunctionResource[K, V]: ...
@overload
def as_resource(*, name: str = "") -> Callable[[BatchFn[K, V]], FunctionResource[K, V]]: ...


def as_resource(
    fn: BatchFn[K, V] | AsyncBatchFn[K, V] | None = None,
    /,
    *,
    name: str = "",
) -> FunctionResource[K, V] | AsyncFunctionResource[K, V] | Callable[..., object]:
    """Decorator turning a batch function into a resource.

    Coroutine functions become AsyncFunctionResource, everything else
    FunctionResource. Usable bare (``@as_resource``) or with arguments
    (``@as_resource(name="users")``).
    """

    def wrap(f: BatchFn[K, V] | AsyncBatchFn[K, V]) -> FunctionResource[K, V] | AsyncFunctionResource[K, V]:
        if inspect.iscoroutinefunction(f):
            return AsyncFunctionResource(f, name)  # type: ignore[arg-type]
        return FunctionResource(f, name)  # type: ignore[arg-type]

    return wrap(fn) if fn is not None else wrap
