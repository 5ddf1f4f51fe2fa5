"""Tests for raw value coercion helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ltfsindex.errors import IndexFormatError
from ltfsindex.utils.values import (
    coerce_count,
    coerce_partition,
    is_false,
    is_true,
    parse_timestamp,
    read_name,
)


class TestCoerceCount:
    """Test coerce_count function."""

    def test_numeric_text(self) -> None:
        assert coerce_count("5000") == 5000

    def test_surrounding_whitespace(self) -> None:
        assert coerce_count("  42\n") == 42

    def test_absent_uses_default(self) -> None:
        assert coerce_count(None) == 0
        assert coerce_count(None, default=7) == 7

    def test_non_numeric_uses_default(self) -> None:
        assert coerce_count("lots") == 0

    def test_negative_uses_default(self) -> None:
        assert coerce_count("-3") == 0

    def test_nested_node_uses_default(self) -> None:
        """Empty elements arrive as empty mappings."""
        assert coerce_count({}) == 0

    def test_integer_input(self) -> None:
        assert coerce_count(12) == 12


class TestCoercePartition:
    """Test coerce_partition function."""

    def test_numeric_partition(self) -> None:
        assert coerce_partition("1") == "1"

    def test_numeric_partition_canonical_form(self) -> None:
        assert coerce_partition("01") == "1"

    def test_integer_partition(self) -> None:
        assert coerce_partition(0) == "0"

    def test_letter_partition(self) -> None:
        assert coerce_partition("a") == "a"
        assert coerce_partition("B") == "b"

    def test_absent_uses_default(self) -> None:
        assert coerce_partition(None) == "b"

    def test_garbage_uses_default(self) -> None:
        assert coerce_partition("partition-x") == "b"
        assert coerce_partition("-1") == "b"

    def test_custom_default(self) -> None:
        assert coerce_partition("", default="a") == "a"


class TestParseTimestamp:
    """Test parse_timestamp function."""

    def test_nanosecond_precision(self) -> None:
        """Digits beyond microseconds are dropped."""
        parsed = parse_timestamp("2015-03-11T15:20:34.123456789Z")

        assert parsed == datetime(2015, 3, 11, 15, 20, 34, 123456, tzinfo=timezone.utc)

    def test_without_fraction(self) -> None:
        parsed = parse_timestamp("2024-01-02T03:04:05Z")

        assert parsed == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_short_fraction(self) -> None:
        parsed = parse_timestamp("2024-01-02T03:04:05.5Z")

        assert parsed.microsecond == 500000

    def test_offset_is_converted_to_utc(self) -> None:
        parsed = parse_timestamp("2024-01-02T03:04:05+02:00")

        assert parsed == datetime(2024, 1, 2, 1, 4, 5, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value",
        [None, "", "yesterday", "2024-01-02", "2024-13-02T03:04:05Z", "2024-01-02T03:04:05", {}],
    )
    def test_malformed_raises(self, value: object) -> None:
        with pytest.raises(IndexFormatError):
            parse_timestamp(value)

    def test_error_names_field(self) -> None:
        with pytest.raises(IndexFormatError, match="modifytime"):
            parse_timestamp("not a time", field="modifytime")


class TestReadName:
    """Test read_name function."""

    def test_plain_name(self) -> None:
        assert read_name("clip.mov") == "clip.mov"

    def test_padded_name_is_kept(self) -> None:
        assert read_name(" notes.txt ") == " notes.txt "

    def test_percent_encoded_name(self) -> None:
        assert read_name({"percentencoded": "true", "content": "a%3Ab"}) == "a:b"

    def test_content_without_encoding(self) -> None:
        assert read_name({"percentencoded": "false", "content": "a%3Ab"}) == "a%3Ab"

    def test_empty_node(self) -> None:
        assert read_name({}) is None
        assert read_name(None) is None
        assert read_name("") is None


class TestFlags:
    """Test is_true and is_false functions."""

    def test_is_true(self) -> None:
        assert is_true("true")
        assert is_true(" true\n")
        assert not is_true("false")
        assert not is_true(None)

    def test_is_false(self) -> None:
        assert is_false("false")
        assert not is_false("true")
        assert not is_false({})
