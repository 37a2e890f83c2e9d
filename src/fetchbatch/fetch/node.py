"""The Fetch value type: a batched data requirement plus its interpretation.

A Fetch pairs the set of keys a computation needs with a continuation that
turns the resolved key -> value mapping into a result. Fetches are pure data.
They are built and combined without any I/O and consumed once by a driver
(see fetchbatch.runtime), which resolves all their keys in a single call.

Implements the applicative interface:
- Functor: map
- Applicative: pure, ap
- Batching: the key set of a combined Fetch is the union of its parts

Example:
    >>> from fetchbatch.fetch import fetch_key, pure
    >>> total = fetch_key("a").map2(lambda a, b: a + b, fetch_key("b"))
    >>> sorted(total.keys)
    ['a', 'b']
    >>> total.apply({"a": 1, "b": 2})
    3
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, cast

from fetchbatch.foundation.errors import MissingKeyError

K = TypeVar("K", bound=Hashable)  # Key type
V = TypeVar("V")  # Resolved value type
A = TypeVar("A")  # Result type
B = TypeVar("B")  # Mapped result type
C = TypeVar("C")

_NO_KEYS: frozenset = frozenset()


@dataclass(frozen=True, slots=True)
class Fetch(Generic[K, V, A]):
    """Immutable description of required keys and how to read their values.

    Attributes:
        keys: Every key the continuation may look up
        continuation: Function from a resolved mapping to the result

    Invariant: the continuation is well-defined for any mapping that contains
    every key in ``keys``. It never needs a key outside ``keys``.
    """

    keys: frozenset[K]
    continuation: Callable[[Mapping[K, V]], A]

    # ─────────────────────────────────────────────────────────────────
    # Evaluation
    # ─────────────────────────────────────────────────────────────────

    def apply(self, resolved: Mapping[K, V]) -> A:
        """Run the continuation against a resolved mapping."""
        return self.continuation(resolved)

    # ─────────────────────────────────────────────────────────────────
    # Functor Operations
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[A], B]) -> Fetch[K, V, B]:
        """Transform the result without touching the key set.

        Type signature: Fetch[K, V, A] -> (A -> B) -> Fetch[K, V, B]
        """
        run = self.continuation
        return Fetch(self.keys, lambda resolved: f(run(resolved)))

    # ─────────────────────────────────────────────────────────────────
    # Applicative Operations
    # ─────────────────────────────────────────────────────────────────

    def ap(self: Fetch[K, V, Callable[[B], C]], other: Fetch[K, V, B]) -> Fetch[K, V, C]:
        """Apply this Fetch's function result to ``other``'s result.

        Both continuations read from the same mapping, so the key sets are
        unioned and one resolve call serves both sides.

        Type signature: Fetch[K, V, B -> C] -> Fetch[K, V, B] -> Fetch[K, V, C]
        """
        run_f, run_x = self.continuation, other.continuation
        return Fetch(self.keys | other.keys, lambda resolved: run_f(resolved)(run_x(resolved)))

    def map2(self, f: Callable[[A, B], C], other: Fetch[K, V, B]) -> Fetch[K, V, C]:
        """Combine two results with a binary function (lifted over both fetches)."""
        run_a, run_b = self.continuation, other.continuation
        return Fetch(self.keys | other.keys, lambda resolved: f(run_a(resolved), run_b(resolved)))

    def zip(self, other: Fetch[K, V, B]) -> Fetch[K, V, tuple[A, B]]:
        """Pair this result with ``other``'s."""
        return self.map2(lambda a, b: (a, b), other)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"Fetch(keys={set(self.keys)!r})" if self.keys else "Fetch(keys=set())"


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def pure(value: A) -> Fetch[K, V, A]:
    """A Fetch that needs no keys and always yields ``value``.

    Type signature: A -> Fetch[K, V, A]
    """
    return Fetch(cast(frozenset[K], _NO_KEYS), lambda _resolved: value)


def fetch_key(key: K) -> Fetch[K, V, V]:
    """A Fetch for a single key, yielding its resolved value.

    Precondition: the resolved mapping contains ``key``. If it does not, the
    continuation raises MissingKeyError when evaluated. Nothing is checked
    while building or combining fetches.
    """

    def lookup(resolved: Mapping[K, V]) -> V:
        try:
            return resolved[key]
        except KeyError:
            raise MissingKeyError(key) from None

    return Fetch(frozenset((key,)), lookup)


def fetch_wrapped(unwrap: Callable[[V], A], key: K) -> Fetch[K, V, A]:
    """Like fetch_key, but passes the value through ``unwrap``.

    For resources that hand back values inside an envelope type, e.g. a
    ``Record`` wrapper whose payload is what callers actually want.
    """
    return fetch_key(key).map(unwrap)
