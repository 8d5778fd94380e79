"""Base models and types used across all modules.

This module contains the fundamental types shared by the classifiers:
the Result wrapper and the base/special type hierarchy.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Result type for operations that can fail.

    Use this instead of exceptions for expected failures.
    Exceptions are reserved for unexpected/programming errors.
    """

    success: bool
    value: T | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, value: T, warnings: list[str] | None = None) -> Result[T]:
        """Create a successful result."""
        return cls(success=True, value=value, warnings=warnings or [])

    @classmethod
    def fail(cls, error: str) -> Result[T]:
        """Create a failed result."""
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Get the value or raise if failed.

        A successful result may carry None (e.g. "no fingerprint").
        """
        if not self.success:
            raise ValueError(f"Result failed: {self.error}")
        return self.value  # type: ignore[return-value]

    def map(self, fn: Callable[[T], Any]) -> Result[Any]:
        """Transform the value if successful."""
        if self.success and self.value is not None:
            return Result.ok(fn(self.value), self.warnings)
        return self


# === Enums ===


class BaseType(str, Enum):
    """Coarse structural type of a column."""

    ANY = "type/*"
    TEXT = "type/Text"
    UUID = "type/UUID"
    NUMBER = "type/Number"
    INTEGER = "type/Integer"
    BIG_INTEGER = "type/BigInteger"
    FLOAT = "type/Float"
    DECIMAL = "type/Decimal"
    BOOLEAN = "type/Boolean"
    DATE_TIME = "type/DateTime"
    DATE = "type/Date"
    TIME = "type/Time"
    COLLECTION = "type/Collection"
    DICTIONARY = "type/Dictionary"
    ARRAY = "type/Array"


class SpecialType(str, Enum):
    """Fine-grained semantic tag layered on top of a base type."""

    SERIALIZED_JSON = "type/SerializedJSON"
    URL = "type/URL"
    EMAIL = "type/Email"
    STATE = "type/State"
    UNIX_TIMESTAMP_SECONDS = "type/UNIXTimestampSeconds"
    UNIX_TIMESTAMP_MILLISECONDS = "type/UNIXTimestampMilliseconds"
    UNIX_TIMESTAMP_MICROSECONDS = "type/UNIXTimestampMicroseconds"


# === Type hierarchy ===

# child -> parent
_PARENTS: dict[str, str] = {
    BaseType.TEXT.value: BaseType.ANY.value,
    BaseType.NUMBER.value: BaseType.ANY.value,
    BaseType.BOOLEAN.value: BaseType.ANY.value,
    BaseType.DATE_TIME.value: BaseType.ANY.value,
    BaseType.COLLECTION.value: BaseType.ANY.value,
    BaseType.UUID.value: BaseType.TEXT.value,
    BaseType.INTEGER.value: BaseType.NUMBER.value,
    BaseType.BIG_INTEGER.value: BaseType.INTEGER.value,
    BaseType.FLOAT.value: BaseType.NUMBER.value,
    BaseType.DECIMAL.value: BaseType.FLOAT.value,
    BaseType.DATE.value: BaseType.DATE_TIME.value,
    BaseType.TIME.value: BaseType.DATE_TIME.value,
    BaseType.DICTIONARY.value: BaseType.COLLECTION.value,
    BaseType.ARRAY.value: BaseType.COLLECTION.value,
}


def _tag(value: BaseType | SpecialType | str) -> str:
    return value.value if isinstance(value, Enum) else value


def ancestors(tag: BaseType | str) -> list[str]:
    """Return the tag followed by all of its ancestors, nearest first."""
    current: str | None = _tag(tag)
    chain: list[str] = []
    while current is not None and current not in chain:
        chain.append(current)
        current = _PARENTS.get(current)
    return chain


def isa(tag: BaseType | str | None, ancestor: BaseType | str) -> bool:
    """Check whether a type tag belongs to the family rooted at ancestor.

    Membership is reflexive and transitive. Tags outside the hierarchy are
    only members of themselves.
    """
    if tag is None:
        return False
    return _tag(ancestor) in ancestors(tag)
