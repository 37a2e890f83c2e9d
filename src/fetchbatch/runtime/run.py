"""Execution driver: one Fetch, one resource, one resolve call.

The driver takes the Fetch's already-unioned key set, resolves it with a
single call, and applies the continuation to the result. However many
fetch_key/combine calls built the Fetch, the backend sees one request.

Example:
    >>> from fetchbatch.fetch import fetch_key
    >>> from fetchbatch.resource import as_resource
    >>> @as_resource
    ... def squares(keys):
    ...     return {k: k * k for k in keys}
    >>> run(fetch_key(3).map2(lambda a, b: a + b, fetch_key(4)), squares)
    25
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import TypeVar

from fetchbatch.fetch import Fetch
from fetchbatch.foundation.config import get_settings
from fetchbatch.resource import AsyncResource, Resource, check_resolved, resource_name

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
A = TypeVar("A")

logger = logging.getLogger("fetchbatch.runtime")

_EMPTY: Mapping = MappingProxyType({})


def _options(validate: bool | None, skip_empty: bool | None) -> tuple[bool, bool]:
    """Resolve per-call overrides against configured defaults."""
    if validate is not None and skip_empty is not None:
        return validate, skip_empty
    settings = get_settings()
    return (
        settings.strict if validate is None else validate,
        settings.runtime.skip_empty_resolve if skip_empty is None else skip_empty,
    )


def run(
    fetch: Fetch[K, V, A],
    resource: Resource[K, V],
    *,
    validate: bool | None = None,
    skip_empty: bool | None = None,
) -> A:
    """Resolve every key ``fetch`` needs in one call and return its result.

    Args:
        fetch: The composed computation
        resource: Synchronous resource to resolve keys with
        validate: Check the mapping for completeness right after resolving
            (defaults to settings.strict)
        skip_empty: Skip the resolve call when no keys are needed
            (defaults to settings.runtime.skip_empty_resolve)

    Raises:
        ResourceContractError: If validating and the mapping is incomplete
        MissingKeyError: If not validating and the continuation reads a key
            the resource omitted
        Exception: Anything the resource raises, unmodified
    """
    check, skip = _options(validate, skip_empty)
    keys = fetch.keys
    if not keys and skip:
        logger.debug("skipping resolve for empty key set")
        return fetch.apply(_EMPTY)

    logger.debug("resolving %d key(s) via %s", len(keys), resource_name(resource))
    resolved = resource.resolve(keys)
    if check:
        check_resolved(keys, resolved, resource)
    return fetch.apply(resolved)


async def run_async(
    fetch: Fetch[K, V, A],
    resource: AsyncResource[K, V],
    *,
    validate: bool | None = None,
    skip_empty: bool | None = None,
) -> A:
    """Async version of run: awaits the single resolve call.

    Same arguments, guarantees and failure behavior as run.
    """
    check, skip = _options(validate, skip_empty)
    keys = fetch.keys
    if not keys and skip:
        logger.debug("skipping resolve for empty key set")
        return fetch.apply(_EMPTY)

    logger.debug("resolving %d key(s) via %s", len(keys), resource_name(resource))
    resolved = await resource.resolve(keys)
    if check:
        check_resolved(keys, resolved, resource)
    return fetch.apply(resolved)
