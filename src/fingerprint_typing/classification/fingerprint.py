"""Special type inference from field fingerprints.

Checks the statistics recorded in a field's fingerprint against fixed
thresholds:
- Text fields: share of values that look like JSON, URLs, emails or US states
- Number fields: whether the interquartile range sits within a window of
  years around now, at seconds, milliseconds or microseconds resolution

Only fields whose special type is unset, or was unset before the current
analysis pass, are eligible. A type chosen by a user is never overwritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

from fingerprint_typing.classification.models import (
    FieldMetadata,
    Fingerprint,
    NumberFingerprint,
    TextFingerprint,
)
from fingerprint_typing.core.config import get_settings
from fingerprint_typing.core.logging import get_logger
from fingerprint_typing.core.models.base import BaseType, SpecialType, isa

logger = get_logger(__name__)


# ============================================================================
# Text fingerprints
# ============================================================================


def percent_key_to_special_type() -> list[tuple[str, SpecialType, float]]:
    """Text indicators in evaluation order, with the type they imply and the
    fraction of values required to imply it.

    State abbreviations are a noisy signal, so they use the lower threshold.
    """
    settings = get_settings()
    return [
        ("percent-json", SpecialType.SERIALIZED_JSON, settings.percent_valid_threshold),
        ("percent-url", SpecialType.URL, settings.percent_valid_threshold),
        ("percent-email", SpecialType.EMAIL, settings.percent_valid_threshold),
        ("percent-state", SpecialType.STATE, settings.lower_percent_valid_threshold),
    ]


def percent_key_above_threshold(
    threshold: float, text_fingerprint: TextFingerprint, percent_key: str
) -> bool:
    """Is the recorded fraction for percent_key at least threshold?

    A missing indicator never passes.
    """
    percent = text_fingerprint.percent(percent_key)
    return percent is not None and percent >= threshold


def infer_special_type_for_text_fingerprint(
    text_fingerprint: TextFingerprint,
) -> SpecialType | None:
    """Return the special type of the first indicator that passes its threshold.

    Declaration order decides between indicators that both pass, not the
    higher fraction.
    """
    for percent_key, special_type, threshold in percent_key_to_special_type():
        if percent_key_above_threshold(threshold, text_fingerprint, percent_key):
            return special_type
    return None


# ============================================================================
# Number fingerprints
# ============================================================================

# Tested in order; the first resolution that fits wins
TIMESTAMP_SCALES: tuple[tuple[int, SpecialType], ...] = (
    (1, SpecialType.UNIX_TIMESTAMP_SECONDS),
    (1_000, SpecialType.UNIX_TIMESTAMP_MILLISECONDS),
    (1_000_000, SpecialType.UNIX_TIMESTAMP_MICROSECONDS),
)


def _shift_years(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return moment.replace(year=moment.year + years, day=28)


@dataclass(frozen=True)
class TimestampWindow:
    """Epoch-second bounds a column's quartiles must fall within."""

    past: int
    future: int

    @classmethod
    def around(cls, now: datetime, years: int) -> TimestampWindow:
        """Window spanning ``years`` calendar years either side of ``now``."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return cls(
            past=int(_shift_years(now, -years).timestamp()),
            future=int(_shift_years(now, years).timestamp()),
        )

    def contains(self, q1: float, q3: float, factor: int = 1) -> bool:
        """Check the quartiles against the bounds scaled by factor."""
        return self.past * factor <= q1 and q3 <= self.future * factor


@lru_cache
def get_timestamp_window() -> TimestampWindow:
    """Window around process start time.

    Computed once and never refreshed: a long-running process keeps the
    bounds it started with. Call ``get_timestamp_window.cache_clear()`` to
    recompute.
    """
    return TimestampWindow.around(datetime.now(UTC), get_settings().timestamp_year_threshold)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def infer_special_type_for_number_fingerprint(
    number_fingerprint: NumberFingerprint,
    window: TimestampWindow | None = None,
) -> SpecialType | None:
    """Mark numeric fields whose quartiles look like recent UNIX timestamps.

    Args:
        number_fingerprint: Fingerprint of a Number-family field
        window: Bounds to test against (defaults to the process-wide window)

    Returns:
        The UNIX timestamp special type for the first resolution that fits,
        or None if a quartile is missing or no resolution fits
    """
    q1, q3 = number_fingerprint.q1, number_fingerprint.q3
    if not (_is_number(q1) and _is_number(q3)):
        return None

    window = window or get_timestamp_window()
    for factor, special_type in TIMESTAMP_SCALES:
        if window.contains(q1, q3, factor):
            return special_type
    return None


# ============================================================================
# Dispatch
# ============================================================================

# Number rather than Integer: some drivers report big integers as Decimal
_RULES_BY_FAMILY = (
    (
        BaseType.TEXT,
        lambda fingerprint: fingerprint.by_type.text,
        infer_special_type_for_text_fingerprint,
    ),
    (
        BaseType.NUMBER,
        lambda fingerprint: fingerprint.by_type.number,
        infer_special_type_for_number_fingerprint,
    ),
)


def infer_special_type_from_fingerprint(
    base_type: BaseType | str | None,
    fingerprint: Fingerprint | None,
) -> SpecialType | None:
    """Apply the rule set for the base type's family to the matching payload.

    A fingerprint without the payload the family expects yields None.
    """
    if fingerprint is None:
        return None
    for family, select_payload, infer in _RULES_BY_FAMILY:
        if not isa(base_type, family):
            continue
        payload = select_payload(fingerprint)
        if payload is not None:
            return infer(payload)
    return None


def can_edit_special_type(field: FieldMetadata) -> bool:
    """Can a classifier set this field's special type?

    Yes if it is unset, or if it was unset in the snapshot taken before the
    current analysis pass (set earlier in this pass, not by a user).
    """
    if field.special_type is None:
        return True
    original = field.previous_snapshot
    return original is not None and original.special_type is None


def infer_special_type(
    field: FieldMetadata,
    fingerprint: Fingerprint | None,
) -> FieldMetadata | None:
    """Classify Text fields with a text fingerprint and Number fields with a
    number fingerprint.

    Args:
        field: Field to classify
        fingerprint: Fingerprint computed for the field, if any

    Returns:
        A copy of the field with special_type set, or None if nothing changes
    """
    if not can_edit_special_type(field):
        return None

    inferred = infer_special_type_from_fingerprint(field.base_type, fingerprint)
    if inferred is None:
        return None

    logger.debug(
        "special_type_inferred",
        field=field.name_for_logging(),
        special_type=inferred.value,
    )
    return field.with_special_type(inferred)
