"""Tests for flexible-field decoding of ambiguous JSON scalars."""

from __future__ import annotations

import json
from typing import Any

import pytest

from factordb.constants import DecodeErrorKind
from factordb.decoding import (
    decode_base,
    decode_exponent,
    decode_id,
    format_decimal,
    parse_decimal,
)
from factordb.errors import DecodeError

BIG = 2**200 + 12345


class TestDecodeId:
    def test_json_integer_and_string_agree(self) -> None:
        assert decode_id(42) == decode_id("42") == 42

    def test_negative_sentinel(self) -> None:
        """FactorDB reports id -1 for the numbers 0 and 1."""
        assert decode_id(-1) == -1
        assert decode_id("-1") == -1

    def test_explicit_plus_sign(self) -> None:
        assert decode_id("+7") == 7

    def test_beyond_64_bits(self) -> None:
        assert decode_id(BIG) == BIG
        assert decode_id(str(BIG)) == BIG

    def test_parsed_from_json_text(self) -> None:
        payload = json.loads(f'{{"id": {BIG}}}')
        assert decode_id(payload["id"]) == BIG

    @pytest.mark.parametrize(
        "value",
        ["abc", "", "4.2", " 42", "42 ", "1_000", "--1", "+", "0x10", "٤٢"],
    )
    def test_rejects_bad_strings(self, value: str) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_id(value)
        assert exc_info.value.kind == DecodeErrorKind.INVALID_VALUE
        assert exc_info.value.field == "id"
        assert exc_info.value.value == value

    @pytest.mark.parametrize(
        "value", [4.2, 42.0, True, False, None, [42], {"id": 42}]
    )
    def test_rejects_other_json_types(self, value: Any) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_id(value)
        assert exc_info.value.kind == DecodeErrorKind.INVALID_VALUE

    def test_decode_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode_id("abc")


class TestDecodeBase:
    def test_string_only(self) -> None:
        assert decode_base("3") == 3
        assert decode_base(str(BIG)) == BIG

    def test_rejects_json_integer(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_base(3)
        assert exc_info.value.kind == DecodeErrorKind.INVALID_VALUE
        assert exc_info.value.field == "base"

    @pytest.mark.parametrize("value", ["x", "", "3.0", None, True, 3.0])
    def test_rejects_non_literals(self, value: Any) -> None:
        with pytest.raises(DecodeError):
            decode_base(value)


class TestDecodeExponent:
    def test_small_integer(self) -> None:
        assert decode_exponent(2) == 2

    def test_zero_is_allowed(self) -> None:
        assert decode_exponent(0) == 0

    def test_no_truncation_past_64_bits(self) -> None:
        assert decode_exponent(2**64) == 2**64
        assert decode_exponent(2**64 + 1) - 2**64 == 1

    def test_rejects_negative(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_exponent(-1)
        assert exc_info.value.kind == DecodeErrorKind.INVALID_VALUE
        assert "negative" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["2", 2.0, 2.5, True, None, [2]])
    def test_rejects_non_integers(self, value: Any) -> None:
        with pytest.raises(DecodeError):
            decode_exponent(value)


class TestLongLiterals:
    """Numbers longer than the interpreter's int/str digit limit."""

    def test_parse_beyond_digit_limit(self) -> None:
        digits = "9" * 5000
        assert parse_decimal(digits) == 10**5000 - 1

    def test_parse_negative_long_literal(self) -> None:
        assert parse_decimal("-" + "1" + "0" * 4999) == -(10**4999)

    def test_format_beyond_digit_limit(self) -> None:
        assert format_decimal(10**5000) == "1" + "0" * 5000

    def test_format_keeps_inner_zero_chunks(self) -> None:
        value = 10**1500 + 7
        text = format_decimal(value)
        assert len(text) == 1501
        assert text.startswith("1") and text.endswith("7")

    def test_format_negative(self) -> None:
        assert format_decimal(-(10**2000)) == "-1" + "0" * 2000

    def test_short_values_match_str(self) -> None:
        for value in (0, -1, 7, 2**64):
            assert format_decimal(value) == str(value)

    def test_round_trip_past_digit_limit(self) -> None:
        value = 3**12000
        assert parse_decimal(format_decimal(value)) == value
