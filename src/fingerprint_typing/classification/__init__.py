"""Fingerprint-based classification module.

Infers special types for fields from their precomputed fingerprints:
- Text fields: JSON, URL, Email and State from predicate percentages
- Number fields: UNIX timestamps (s, ms, us) from quartiles
"""

from fingerprint_typing.classification.fingerprint import (
    TimestampWindow,
    can_edit_special_type,
    get_timestamp_window,
    infer_special_type,
    infer_special_type_for_number_fingerprint,
    infer_special_type_for_text_fingerprint,
    infer_special_type_from_fingerprint,
)
from fingerprint_typing.classification.models import (
    DateTimeFingerprint,
    FieldMetadata,
    Fingerprint,
    GlobalFingerprint,
    NumberFingerprint,
    TextFingerprint,
    TypeFingerprint,
    parse_fingerprint,
)
from fingerprint_typing.classification.runner import Classifier, classify_field, classify_fields

__all__ = [
    # Main entry points
    "infer_special_type",
    "classify_field",
    "classify_fields",
    "Classifier",
    # Rules
    "can_edit_special_type",
    "infer_special_type_from_fingerprint",
    "infer_special_type_for_text_fingerprint",
    "infer_special_type_for_number_fingerprint",
    "TimestampWindow",
    "get_timestamp_window",
    # Models
    "FieldMetadata",
    "Fingerprint",
    "GlobalFingerprint",
    "TypeFingerprint",
    "TextFingerprint",
    "NumberFingerprint",
    "DateTimeFingerprint",
    "parse_fingerprint",
]
