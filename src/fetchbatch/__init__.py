"""fetchbatch - batched, composable data fetching without N+1 queries.

Describe what data you need with small, independent fetches; combine them
freely; resolve the whole thing with one backend call.

Quick Start:
    >>> from fetchbatch import as_resource, fetch_key, map2, run
    >>>
    >>> @as_resource
    ... def users(ids: frozenset[int]) -> dict[int, str]:
    ...     print(f"loading {sorted(ids)}")
    ...     return {i: f"user-{i}" for i in ids}
    >>>
    >>> pair = map2(lambda a, b: f"{a} & {b}", fetch_key(1), fetch_key(2))
    >>> run(pair, users)
    loading [1, 2]
    'user-1 & user-2'

Memoization (one cache per unit of work):
    >>> from fetchbatch import MemoizedResource
    >>> cached = MemoizedResource(users)
    >>> run(fetch_key(1), cached)
    loading [1]
    'user-1'
    >>> run(fetch_key(1), cached)  # served from cache
    'user-1'

Async resources:
    >>> from fetchbatch import run_async
    >>> result = await run_async(pair, async_users)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Cache
from .cache import AsyncMemoizedResource, CacheState, CacheStats, ContextState, MemoizedResource, MemoryState

# Fetch
from .fetch import (
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

# Foundation
from .foundation import (
    ContractViolation,
    ErrorCode,
    FetchbatchSettings,
    FetchError,
    MissingKeyError,
    ResourceContractError,
    clear_settings_cache,
    get_settings,
)

# Logging
from .observability import configure_logging

# Resources
from .resource import (
    AsyncFunctionResource,
    AsyncResource,
    BlockingResource,
    FunctionResource,
    Resource,
    as_resource,
    check_resolved,
)

# Runtime
from .runtime import run, run_async

__all__ = [
    # Version
    "__version__",
    # Fetch
    "Fetch",
    "pure",
    "fetch_key",
    "fetch_wrapped",
    "fetch_many",
    "fmap",
    "combine",
    "map2",
    "sequence",
    "traverse",
    # Resources
    "Resource",
    "AsyncResource",
    "check_resolved",
    "as_resource",
    "FunctionResource",
    "AsyncFunctionResource",
    "BlockingResource",
    # Runtime
    "run",
    "run_async",
    # Cache
    "MemoizedResource",
    "AsyncMemoizedResource",
    "CacheStats",
    "CacheState",
    "MemoryState",
    "ContextState",
    # Errors
    "ErrorCode",
    "FetchError",
    "MissingKeyError",
    "ResourceContractError",
    "ContractViolation",
    # Config & logging
    "FetchbatchSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
]
