"""Tests for the base type hierarchy and Result."""

import pytest

from fingerprint_typing.core.models.base import BaseType, Result, SpecialType, ancestors, isa


class TestIsa:
    """Tests for type family membership."""

    def test_reflexive(self):
        assert isa(BaseType.TEXT, BaseType.TEXT)
        assert isa("type/Unknown", "type/Unknown")

    def test_number_family(self):
        assert isa(BaseType.INTEGER, BaseType.NUMBER)
        assert isa(BaseType.BIG_INTEGER, BaseType.NUMBER)
        assert isa(BaseType.DECIMAL, BaseType.NUMBER)
        assert isa(BaseType.FLOAT, BaseType.NUMBER)

    def test_decimal_is_not_integer(self):
        assert not isa(BaseType.DECIMAL, BaseType.INTEGER)

    def test_text_family(self):
        assert isa("type/UUID", BaseType.TEXT)
        assert not isa(BaseType.INTEGER, BaseType.TEXT)

    def test_everything_is_any(self):
        for base_type in BaseType:
            assert isa(base_type, BaseType.ANY)

    def test_unknown_and_missing_tags(self):
        assert not isa("type/Geometry", BaseType.TEXT)
        assert not isa(None, BaseType.TEXT)

    def test_ancestors_nearest_first(self):
        assert ancestors(BaseType.BIG_INTEGER) == [
            "type/BigInteger",
            "type/Integer",
            "type/Number",
            "type/*",
        ]

    def test_special_types_use_tag_spelling(self):
        assert SpecialType.UNIX_TIMESTAMP_MILLISECONDS == "type/UNIXTimestampMilliseconds"


class TestResult:
    """Tests for the Result wrapper."""

    def test_ok(self):
        result = Result.ok(3)
        assert result.success
        assert result.unwrap() == 3

    def test_fail(self):
        result = Result.fail("nope")
        assert not result.success
        assert result.error == "nope"
        with pytest.raises(ValueError, match="nope"):
            result.unwrap()

    def test_map(self):
        assert Result.ok(2).map(lambda v: v * 2).unwrap() == 4
        assert not Result.fail("nope").map(lambda v: v * 2).success
