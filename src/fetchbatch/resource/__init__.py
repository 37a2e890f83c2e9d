"""Resource contract and adapters.

A resource resolves a set of keys to a mapping that covers all of them.
"""

from .adapters import AsyncFunctionResource, BlockingResource, FunctionResource, as_resource
from .protocol import AsyncResource, Resource, check_resolved, resource_name

__all__ = [
    # Contract
    "Resource",
    "AsyncResource",
    "check_resolved",
    "resource_name",
    # Adapters
    "FunctionResource",
    "AsyncFunctionResource",
    "BlockingResource",
    "as_resource",
]
