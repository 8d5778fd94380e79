"""Shared models: Result wrapper and the type hierarchy."""

from fingerprint_typing.core.models.base import (
    BaseType,
    Result,
    SpecialType,
    ancestors,
    isa,
)

__all__ = [
    "BaseType",
    "Result",
    "SpecialType",
    "ancestors",
    "isa",
]
