"""Module-level combinators over Fetch values.

Everything here is derived from pure/map/ap, so the key set of any result is
exactly the union of the key sets that went in.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Callable, TypeVar

from .node import Fetch, fetch_key, pure

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
T = TypeVar("T")


def fmap(f: Callable[[A], B], node: Fetch[K, V, A]) -> Fetch[K, V, B]:
    """Function-first form of Fetch.map."""
    return node.map(f)


def combine(node_f: Fetch[K, V, Callable[[A], B]], node_x: Fetch[K, V, A]) -> Fetch[K, V, B]:
    """Apply a fetched function to a fetched value, unioning their key sets.

    This is the batching primitive: two independently written fetches merge
    into a single requirement without either knowing about the other.
    """
    return node_f.ap(node_x)


def map2(f: Callable[[A, B], C], a: Fetch[K, V, A], b: Fetch[K, V, B]) -> Fetch[K, V, C]:
    """Function-first form of Fetch.map2."""
    return a.map2(f, b)


def sequence(nodes: Iterable[Fetch[K, V, A]]) -> Fetch[K, V, list[A]]:
    """Turn a list of fetches into a fetch of a list, preserving order.

    Type signature: [Fetch[K, V, A]] -> Fetch[K, V, [A]]

    Example:
        >>> both = sequence([fetch_key(1), fetch_key(2)])
        >>> both.apply({1: "a", 2: "b"})
        ['a', 'b']
    """
    nodes = list(nodes)
    keys: frozenset[K] = frozenset().union(*(n.keys for n in nodes))
    runs = [n.continuation for n in nodes]
    return Fetch(keys, lambda resolved: [run(resolved) for run in runs])


def traverse(items: Iterable[T], f: Callable[[T], Fetch[K, V, A]]) -> Fetch[K, V, list[A]]:
    """Map a fetch-producing function over items and sequence the results.

    Type signature: [T] -> (T -> Fetch[K, V, A]) -> Fetch[K, V, [A]]
    """
    return sequence(f(item) for item in items)


def fetch_many(keys: Iterable[K]) -> Fetch[K, V, dict[K, V]]:
    """Fetch several keys at once, yielding a dict in the order given."""
    keys = list(dict.fromkeys(keys))
    if not keys:
        return pure({}).map(dict)
    return sequence(fetch_key(k) for k in keys).map(lambda values: dict(zip(keys, values)))
