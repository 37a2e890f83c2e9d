"""The contract every key -> value resolver must satisfy.

A resource turns a set of keys into a mapping covering all of them, in one
batched call. Two execution contexts are supported:
    - Resource: resolve() returns the mapping directly
    - AsyncResource: resolve() is a coroutine returning the mapping

Key-preservation law: for every key k in the requested set, the returned
mapping contains k. This holds for the empty set too: resolve(frozenset())
must succeed (returning an empty or larger mapping). Implementations may do
arbitrary I/O; nothing else is required of them.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Protocol, TypeVar, runtime_checkable

from fetchbatch.foundation.errors import ContractViolation, ResourceContractError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
K_contra = TypeVar("K_contra", bound=Hashable, contravariant=True)
V_co = TypeVar("V_co", covariant=True)


@runtime_checkable
class Resource(Protocol[K_contra, V_co]):
    """Synchronous batch resolver."""

    def resolve(self, keys: frozenset[K_contra]) -> Mapping[K_contra, V_co]:
        """Resolve every key in ``keys`` with a single backend round trip."""
        ...


@runtime_checkable
class AsyncResource(Protocol[K_contra, V_co]):
    """Asynchronous batch resolver (resolve is a coroutine)."""

    async def resolve(self, keys: frozenset[K_contra]) -> Mapping[K_contra, V_co]:
        """Resolve every key in ``keys`` with a single backend round trip."""
        ...


def resource_name(resource: object) -> str:
    """Name used for a resource in logs and error messages."""
    return getattr(resource, "name", None) or type(resource).__name__


def check_resolved(keys: frozenset[K], resolved: Mapping[K, V], resource: object = "resource") -> Mapping[K, V]:
    """Validate that ``resolved`` covers every key in ``keys``.

    Returns ``resolved`` unchanged so it can be used inline.

    Raises:
        ResourceContractError: If any requested key is absent
    """
    missing = [k for k in keys if k not in resolved]
    if missing:
        name = resource if isinstance(resource, str) else resource_name(resource)
        raise ResourceContractError(ContractViolation.create(name, len(keys), missing))
    return resolved
