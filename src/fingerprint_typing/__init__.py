"""Fingerprint Typing.

Infers semantic special types for catalogued columns from their statistical
fingerprints.
"""

__version__ = "0.1.0"

from fingerprint_typing.classification import classify_field, infer_special_type
from fingerprint_typing.core.models.base import BaseType, Result, SpecialType

__all__ = [
    "BaseType",
    "Result",
    "SpecialType",
    "classify_field",
    "infer_special_type",
    "__version__",
]
