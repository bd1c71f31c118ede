"""Tests for udf.presentation — grouped Base32 rendering and parsing."""

from __future__ import annotations

import pytest

from udf.errors import UDFDecodeError
from udf.presentation import (
    base32_no_pad,
    chunk,
    parse_base32,
    presentation_base32,
)


class TestChunk:
    def test_even(self) -> None:
        assert chunk("ABCDEFGH", 4) == ["ABCD", "EFGH"]

    def test_short_final_group(self) -> None:
        assert chunk("ABCDEFGHI", 4) == ["ABCD", "EFGH", "I"]

    def test_empty(self) -> None:
        assert chunk("", 4) == []

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            chunk("ABC", 0)


class TestPresentation:
    def test_plain_text(self) -> None:
        text = presentation_base32(b"I am francis here!")
        assert text == "JEQG-C3JA-MZZG-C3TD-NFZS-A2DF-OJSS-C"

    def test_no_padding(self) -> None:
        assert "=" not in base32_no_pad(b"\x01")
        assert base32_no_pad(b"\x01") == "AE"

    def test_bit_limit(self) -> None:
        buffer = bytes(range(25))
        text = presentation_base32(buffer, bits=125)
        assert len(text.split("-")) == 7  # ceil(125 / 20)

    def test_bit_limit_exact_group(self) -> None:
        text = presentation_base32(bytes(range(25)), bits=100)
        assert len(text.split("-")) == 5

    def test_bit_limit_exceeds_buffer(self) -> None:
        buffer = bytes(range(5))
        assert presentation_base32(buffer, bits=400) == presentation_base32(buffer)

    def test_prefix_of_full(self) -> None:
        buffer = bytes(range(40))
        full = presentation_base32(buffer)
        short = presentation_base32(buffer, bits=60)
        assert full.startswith(short)

    def test_custom_grouping(self) -> None:
        text = presentation_base32(b"I am francis here!", group_size=5, delimiter=".")
        assert text == "JEQGC.3JAMZ.ZGC3T.DNFZS.A2DFO.JSSC"

    def test_custom_grouping_bit_limit(self) -> None:
        # 25 bits per group of five characters
        text = presentation_base32(bytes(range(25)), group_size=5, bits=50)
        assert len(text.split("-")) == 2

    def test_deterministic(self) -> None:
        buffer = bytes(range(30))
        assert presentation_base32(buffer) == presentation_base32(buffer)


class TestParse:
    def test_round_trip(self) -> None:
        buffer = bytes(range(1, 30))
        assert parse_base32(presentation_base32(buffer)) == buffer

    def test_plain_text(self) -> None:
        assert parse_base32("JEQG-C3JA-MZZG-C3TD-NFZS-A2DF-OJSS-C") == (
            b"I am francis here!"
        )

    def test_without_delimiters(self) -> None:
        assert parse_base32("JEQGC3JAMZZGC3TDNFZSA2DFOJSSC") == b"I am francis here!"

    def test_lower_case_and_whitespace(self) -> None:
        assert parse_base32("  jeqg-c3ja-mzzg-c3td-nfzs-a2df-ojss-c\n") == (
            b"I am francis here!"
        )

    def test_custom_delimiter(self) -> None:
        text = "JEQGC.3JAMZ.ZGC3T.DNFZS.A2DFO.JSSC"
        assert parse_base32(text, delimiter=".") == b"I am francis here!"

    @pytest.mark.parametrize("text", ["", "   ", "----"])
    def test_empty(self, text: str) -> None:
        with pytest.raises(UDFDecodeError, match="empty"):
            parse_base32(text)

    @pytest.mark.parametrize(
        "text",
        [
            "MGHB-JW1Z",  # '1' outside the alphabet
            "MGHB-JW!Z",
            "A",  # impossible length
            "MGH",
        ],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(UDFDecodeError, match="malformed"):
            parse_base32(text)
