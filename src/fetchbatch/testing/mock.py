"""Recording resources for tests.

RecordingResource / AsyncRecordingResource serve values from a dict or a
per-key function and record every resolve call for verification.

Example:
    >>> users = RecordingResource(lambda k: f"user-{k}")
    >>> users.resolve(frozenset({1, 2}))[1]
    'user-1'
    >>> users.assert_called_once_with({1, 2})
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Call(Generic[K]):
    """Record of a single resolve invocation."""
    keys: frozenset[K]


@dataclass
class _Recorder(Generic[K, V]):
    source: Mapping[K, V] | Callable[[K], V]
    omit: frozenset[K] = field(default_factory=frozenset)
    raises: type[Exception] | Exception | None = None
    calls: list[Call[K]] = field(default_factory=list)
    name: str = "recording"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def called(self) -> bool:
        return self.call_count > 0

    @property
    def last_call(self) -> Call[K] | None:
        return self.calls[-1] if self.calls else None

    @property
    def requested(self) -> list[frozenset[K]]:
        """Key sets of every call, in call order."""
        return [c.keys for c in self.calls]

    def assert_called_once_with(self, keys: Iterable[K]) -> None:
        if self.call_count != 1:
            raise AssertionError(f"Expected 1 resolve call, got {self.call_count}")
        expected = frozenset(keys)
        if self.calls[0].keys != expected:
            raise AssertionError(f"Expected keys {set(expected)!r}, got {set(self.calls[0].keys)!r}")

    def assert_not_called(self) -> None:
        if self.called:
            raise AssertionError(f"Resource resolved {self.call_count} times")

    def reset(self) -> None:
        self.calls.clear()

    def _serve(self, keys: frozenset[K]) -> dict[K, V]:
        self.calls.append(Call(keys))
        if self.raises is not None:
            raise self.raises() if isinstance(self.raises, type) else self.raises
        lookup = self.source.__getitem__ if isinstance(self.source, Mapping) else self.source
        return {k: lookup(k) for k in keys if k not in self.omit}


class RecordingResource(_Recorder[K, V]):
    """Synchronous resource serving from ``source`` and recording calls.

    Args:
        source: Mapping to read values from, or a function of the key
        omit: Keys deliberately left out of results (to break key preservation)
        raises: Exception (class or instance) every resolve raises
    """

    def resolve(self, keys: frozenset[K]) -> dict[K, V]:
        return self._serve(keys)


class AsyncRecordingResource(_Recorder[K, V]):
    """Async counterpart of RecordingResource."""

    async def resolve(self, keys: frozenset[K]) -> dict[K, V]:
        return self._serve(keys)
