"""Core module - configuration, logging, and shared models."""

from fingerprint_typing.core.config import Settings, get_settings
from fingerprint_typing.core.models.base import (
    BaseType,
    Result,
    SpecialType,
    isa,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Models - enums
    "BaseType",
    "SpecialType",
    # Models - base data structures
    "Result",
    "isa",
]
