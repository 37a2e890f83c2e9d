"""Error handling for fetchbatch.

- ErrorCode: Classification of fetch failures
- MissingKeyError: Lazy, fatal lookup failure inside a continuation
- ResourceContractError/ContractViolation: Eager completeness check failures
"""

from .errors import ContractViolation, ErrorCode, FetchError, MissingKeyError, ResourceContractError

__all__ = [
    "ErrorCode",
    "FetchError",
    "MissingKeyError",
    "ResourceContractError",
    "ContractViolation",
]
