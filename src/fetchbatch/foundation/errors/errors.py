"""Error codes and exceptions for fetch execution.

Two failure classes exist:
    - MissingKeyError: a continuation dereferenced a key the resource never
      returned. Raised lazily, only when the value is actually needed.
    - ResourceContractError: eager validation found the resolved mapping
      incomplete right after the resolve call.

Failures raised by a resource itself are never caught or wrapped here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Cap on how many missing keys are rendered into a message
_MAX_RENDERED_KEYS = 10


class ErrorCode(StrEnum):
    """Machine-readable classification of fetch failures."""
    MISSING_KEY = "MISSING_KEY"
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"


class ContractViolation(BaseModel):
    """Structured report of a resource breaking the key-preservation law.

    Attributes:
        resource: Name of the resource that produced the incomplete mapping
        requested: Number of keys that were requested
        missing: repr() of each requested key absent from the mapping
        code: Always CONTRACT_VIOLATION
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="forbid",
        json_schema_extra={
            "title": "Contract Violation",
            "examples": [{"resource": "UserResource", "requested": 3, "missing": ["42"]}],
        },
    )

    resource: Annotated[str, Field(min_length=1)]
    requested: Annotated[int, Field(ge=0)]
    missing: tuple[str, ...] = Field(min_length=1)
    code: ErrorCode = ErrorCode.CONTRACT_VIOLATION

    @computed_field
    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @classmethod
    def create(cls, resource: object, requested: int, missing: list[object]) -> Self:
        """Build from live objects. Keys are stored as reprs, sorted for stable output."""
        name = resource if isinstance(resource, str) else type(resource).__name__
        return cls(resource=name, requested=requested, missing=tuple(sorted(repr(k) for k in missing)))

    def render(self) -> str:
        shown = ", ".join(self.missing[:_MAX_RENDERED_KEYS])
        more = f" (+{self.missing_count - _MAX_RENDERED_KEYS} more)" if self.missing_count > _MAX_RENDERED_KEYS else ""
        return (f"{self.resource} resolved {self.requested} key(s) but omitted "
                f"{self.missing_count}: {shown}{more}")

    __str__ = render


class FetchError(Exception):
    """Base class for errors raised by fetchbatch itself."""

    code: ErrorCode = ErrorCode.CONTRACT_VIOLATION


class MissingKeyError(FetchError, KeyError):
    """A fetch continuation looked up a key absent from the resolved mapping.

    This signals a resource that broke the key-preservation law. It is a
    programming error, not a recoverable runtime condition.
    """

    code = ErrorCode.MISSING_KEY

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"key {self.key!r} missing from resolved mapping (resource broke key preservation)"


class ResourceContractError(FetchError):
    """Eager validation found requested keys missing from a resolve result."""

    __slots__ = ("violation",)
    code = ErrorCode.CONTRACT_VIOLATION

    def __init__(self, violation: ContractViolation) -> None:
        self.violation = violation
        super().__init__(violation.render())
