"""Composable batched data requirements.

Build fetches with pure/fetch_key and combine them with map/combine; the
key sets union, so any composition resolves in one call.

Example:
    >>> from fetchbatch.fetch import fetch_key, map2
    >>> pair = map2(lambda a, b: (a, b), fetch_key(1), fetch_key(2))
    >>> sorted(pair.keys)
    [1, 2]
"""

from .combinators import combine, fetch_many, fmap, map2, sequence, traverse
from .node import Fetch, fetch_key, fetch_wrapped, pure

__all__ = [
    # Core type
    "Fetch",
    # Constructors
    "pure",
    "fetch_key",
    "fetch_wrapped",
    "fetch_many",
    # Combinators
    "fmap",
    "combine",
    "map2",
    "sequence",
    "traverse",
]
