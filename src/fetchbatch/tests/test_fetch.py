"""Tests for Fetch values and combinators.

Validates:
- Functor laws
- Applicative laws
- Key-set union laws (commutative, associative, idempotent)
- Lookup failure behavior
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fetchbatch.fetch import (
    Fetch,
    combine,
    fetch_key,
    fetch_many,
    fetch_wrapped,
    fmap,
    map2,
    pure,
    sequence,
    traverse,
)
from fetchbatch.foundation.errors import ErrorCode, MissingKeyError
from fetchbatch.testing.strategies import fetches, function_fetches, unary

RESOLVED: dict[int, int] = {i: i * 10 for i in range(8)}


def observe(node: Fetch[int, int, object], resolved: Mapping[int, int] = RESOLVED) -> tuple[frozenset[int], object]:
    """The observable parts of a Fetch: its key set and its result on ``resolved``."""
    return node.keys, node.apply(resolved)


def same(a: Fetch[int, int, object], b: Fetch[int, int, object]) -> bool:
    """Observational equality: same key set, same result on a covering mapping."""
    return observe(a) == observe(b)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


@given(fetches())
def test_functor_identity(f: Fetch[int, int, int]) -> None:
    """Functor law: fmap id = id"""
    assert same(fmap(lambda x: x, f), f)


@given(fetches(), unary, unary)
def test_functor_composition(f: Fetch[int, int, int], g: Callable[[int], int], h: Callable[[int], int]) -> None:
    """Functor law: fmap (g . h) = fmap g . fmap h"""
    assert same(f.map(lambda x: g(h(x))), f.map(h).map(g))


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Applicative Laws
# ═════════════════════════════════════════════════════════════════════════════


@given(fetches())
def test_applicative_identity(v: Fetch[int, int, int]) -> None:
    """Applicative law: pure id <*> v = v"""
    assert same(combine(pure(lambda x: x), v), v)


@given(unary, st.integers())
def test_applicative_homomorphism(fn: Callable[[int], int], x: int) -> None:
    """Applicative law: pure f <*> pure x = pure (f x)"""
    assert same(combine(pure(fn), pure(x)), pure(fn(x)))


@given(function_fetches(), st.integers())
def test_applicative_interchange(u: Fetch[int, int, Callable[[int], int]], y: int) -> None:
    """Applicative law: u <*> pure y = pure ($ y) <*> u"""
    assert same(combine(u, pure(y)), combine(pure(lambda fn: fn(y)), u))


@given(function_fetches(), function_fetches(), fetches())
def test_applicative_composition(
    u: Fetch[int, int, Callable[[int], int]],
    v: Fetch[int, int, Callable[[int], int]],
    w: Fetch[int, int, int],
) -> None:
    """Applicative law: pure (.) <*> u <*> v <*> w = u <*> (v <*> w)"""
    compose = pure(lambda f: lambda g: lambda x: f(g(x)))

    left = combine(combine(combine(compose, u), v), w)
    right = combine(u, combine(v, w))

    assert same(left, right)


@given(fetches(), unary)
def test_map_agrees_with_pure_combine(f: Fetch[int, int, int], g: Callable[[int], int]) -> None:
    """fmap g x = pure g <*> x"""
    assert same(f.map(g), combine(pure(g), f))


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Key-Set Union
# ═════════════════════════════════════════════════════════════════════════════


@given(fetches(), fetches())
def test_combine_keys_are_union(a: Fetch[int, int, int], b: Fetch[int, int, int]) -> None:
    assert map2(lambda x, y: (x, y), a, b).keys == a.keys | b.keys
    assert combine(a.map(lambda x: lambda y: x + y), b).keys == a.keys | b.keys


@given(fetches(), fetches())
def test_key_union_commutative(a: Fetch[int, int, int], b: Fetch[int, int, int]) -> None:
    assert a.zip(b).keys == b.zip(a).keys


@given(fetches(), fetches(), fetches())
def test_key_union_associative(a: Fetch[int, int, int], b: Fetch[int, int, int], c: Fetch[int, int, int]) -> None:
    assert a.zip(b).zip(c).keys == a.zip(b.zip(c)).keys


@given(fetches())
def test_key_union_idempotent(a: Fetch[int, int, int]) -> None:
    assert a.zip(a).keys == a.keys


@given(st.lists(fetches(), max_size=6), st.integers(min_value=0, max_value=6))
def test_grouping_does_not_change_keys(nodes: list[Fetch[int, int, int]], split: int) -> None:
    flat = sequence(nodes)
    nested = sequence([sequence(nodes[:split]), sequence(nodes[split:])])
    assert flat.keys == nested.keys == frozenset().union(*(n.keys for n in nodes))


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_pure_needs_no_keys() -> None:
    node = pure("x")
    assert node.keys == frozenset()
    assert node.apply({}) == "x"


def test_fetch_key_reads_value() -> None:
    node = fetch_key("a")
    assert node.keys == frozenset({"a"})
    assert node.apply({"a": 1, "b": 2}) == 1


def test_fetch_key_missing_raises_on_evaluation_only() -> None:
    node = fetch_key(9).map(str)  # building never fails

    with pytest.raises(MissingKeyError) as exc_info:
        node.apply({1: 10})

    assert exc_info.value.key == 9
    assert exc_info.value.code is ErrorCode.MISSING_KEY
    assert "9" in str(exc_info.value)


def test_missing_key_error_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        fetch_key("gone").apply({})


def test_unused_branch_does_not_need_its_key() -> None:
    """Only keys actually dereferenced can fail."""
    node = map2(lambda a, _b: a, fetch_key(1), pure(0))
    assert node.apply({1: "ok"}) == "ok"


def test_fetch_wrapped_unwraps() -> None:
    class Envelope:
        def __init__(self, payload: str) -> None:
            self.payload = payload

    node = fetch_wrapped(lambda e: e.payload, "k")

    assert node.keys == frozenset({"k"})
    assert node.apply({"k": Envelope("inside")}) == "inside"


def test_sequence_preserves_order() -> None:
    node = sequence([fetch_key(3), fetch_key(1), fetch_key(2)])
    assert node.apply(RESOLVED) == [30, 10, 20]


def test_sequence_empty() -> None:
    node = sequence([])
    assert node.keys == frozenset()
    assert node.apply({}) == []


def test_traverse() -> None:
    node = traverse([1, 2, 3], lambda k: fetch_key(k).map(lambda v: v + 1))
    assert node.keys == frozenset({1, 2, 3})
    assert node.apply(RESOLVED) == [11, 21, 31]


def test_fetch_many_dedupes_and_keeps_order() -> None:
    node = fetch_many([3, 1, 3])
    assert node.keys == frozenset({1, 3})
    assert list(node.apply(RESOLVED).items()) == [(3, 30), (1, 10)]


def test_fetch_many_empty_returns_fresh_dict() -> None:
    node = fetch_many([])
    first = node.apply({})
    first["x"] = 1
    assert node.apply({}) == {}


def test_fetch_is_immutable() -> None:
    node = fetch_key(1)
    with pytest.raises(AttributeError):
        node.keys = frozenset()  # type: ignore[misc]
