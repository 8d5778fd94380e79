"""Classification Models.

Pydantic models for the values the classifiers read and produce:
- FieldMetadata: a catalogued column, with its prior-pass snapshot
- Fingerprint: precomputed statistical summary of a column's values
- GlobalFingerprint: statistics computed for every column
- TextFingerprint: predicate percentages for text columns
- NumberFingerprint: distribution statistics for numeric columns
- DateTimeFingerprint: earliest/latest for temporal columns

Fingerprints arrive in the upstream wire shape, with hyphenated keys and
base-type tags (``type/Text``) as variant keys. Models accept both those keys
and the Python field names.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fingerprint_typing.core.models.base import BaseType, Result, SpecialType

_FINGERPRINT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class GlobalFingerprint(BaseModel):
    """Statistics computed for every column regardless of type."""

    model_config = _FINGERPRINT_CONFIG

    distinct_count: int | None = Field(default=None, alias="distinct-count")


class TextFingerprint(BaseModel):
    """Share of non-null sampled values satisfying each text predicate."""

    model_config = _FINGERPRINT_CONFIG

    percent_json: float | None = Field(default=None, ge=0.0, le=1.0, alias="percent-json")
    percent_url: float | None = Field(default=None, ge=0.0, le=1.0, alias="percent-url")
    percent_email: float | None = Field(default=None, ge=0.0, le=1.0, alias="percent-email")
    percent_state: float | None = Field(default=None, ge=0.0, le=1.0, alias="percent-state")
    average_length: float | None = Field(default=None, alias="average-length")

    def percent(self, key: str) -> float | None:
        """Recorded fraction for an indicator, by wire key or field name."""
        attr = key.replace("-", "_")
        if not attr.startswith("percent_") or attr not in type(self).model_fields:
            return None
        return getattr(self, attr)


class NumberFingerprint(BaseModel):
    """Distribution statistics for a numeric column.

    Quartiles are absent when the sample was too degenerate to compute them.
    """

    model_config = _FINGERPRINT_CONFIG

    min: float | None = Field(default=None, strict=True)
    max: float | None = Field(default=None, strict=True)
    avg: float | None = Field(default=None, strict=True)
    q1: float | None = Field(default=None, strict=True)
    q3: float | None = Field(default=None, strict=True)
    sd: float | None = Field(default=None, strict=True)


class DateTimeFingerprint(BaseModel):
    """Range of a temporal column, as ISO-8601 strings."""

    model_config = _FINGERPRINT_CONFIG

    earliest: str | None = None
    latest: str | None = None


class TypeFingerprint(BaseModel):
    """Type-specific fingerprint variants, keyed by base-type family."""

    model_config = _FINGERPRINT_CONFIG

    text: TextFingerprint | None = Field(default=None, alias=BaseType.TEXT.value)
    number: NumberFingerprint | None = Field(default=None, alias=BaseType.NUMBER.value)
    date_time: DateTimeFingerprint | None = Field(default=None, alias=BaseType.DATE_TIME.value)


class Fingerprint(BaseModel):
    """Statistical summary of a column, produced upstream and never modified here."""

    model_config = _FINGERPRINT_CONFIG

    global_: GlobalFingerprint | None = Field(default=None, alias="global")
    by_type: TypeFingerprint = Field(default_factory=TypeFingerprint, alias="type")
    experimental: Mapping[str, Any] | None = None

    @field_validator("by_type", mode="before")
    @classmethod
    def _no_type_fingerprint(cls, value: Any) -> Any:
        """A null ``type`` means no type-specific statistics were computed."""
        return TypeFingerprint() if value is None else value

    @field_validator("experimental")
    @classmethod
    def _freeze_experimental(cls, value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        return None if value is None else MappingProxyType(dict(value))


class FieldMetadata(BaseModel):
    """A catalogued column.

    ``previous_snapshot`` is the field as it stood before the current analysis
    pass. Classifiers use it to tell a type chosen by a user from one set
    earlier in the same pass.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    id: int | None = None
    table_name: str | None = None
    base_type: BaseType | str
    special_type: SpecialType | str | None = None
    previous_snapshot: FieldMetadata | None = None

    def with_special_type(self, special_type: SpecialType | str | None) -> FieldMetadata:
        """Return a copy of this field with special_type replaced."""
        return self.model_copy(update={"special_type": special_type})

    def with_snapshot(self, snapshot: FieldMetadata | None) -> FieldMetadata:
        """Return a copy of this field with previous_snapshot replaced."""
        return self.model_copy(update={"previous_snapshot": snapshot})

    def name_for_logging(self) -> str:
        """Identify the field in log output, e.g. ``Field 12 'users.email'``."""
        qualified = f"{self.table_name}.{self.name}" if self.table_name else self.name
        if self.id is not None:
            return f"Field {self.id} '{qualified}'"
        return f"Field '{qualified}'"


def parse_fingerprint(payload: Mapping[str, Any] | None) -> Result[Fingerprint | None]:
    """Build a Fingerprint from its upstream JSON payload.

    Args:
        payload: Decoded fingerprint, or None when none was computed

    Returns:
        Result containing the Fingerprint (None when payload is None)
    """
    if payload is None:
        return Result.ok(None)
    try:
        return Result.ok(Fingerprint.model_validate(payload))
    except ValidationError as e:
        return Result.fail(f"Invalid fingerprint: {e}")
