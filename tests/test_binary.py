"""Tests for udf.binary — UDF values and precision truncation."""

from __future__ import annotations

import dataclasses

import pytest

from udf.binary import UDFValue, type_bds_to_binary
from udf.errors import UnknownTypeIdentifierError
from udf.types import DEFAULT_BITS, TypeIdentifier

OUTER = bytes.fromhex(
    "8E 14 D9 19 4E D6 02 12 C3 30 A7 BB 5F C7 17 6D AE 9A 56 7C A8 2A 23 1F"
    " 96 75 ED 53 10 EC E8 F2 60 14 24 D0 C8 BC 55 3D C0 70 F7 5E 86 38 1A 0B"
    " CB 55 9C B2 87 81 27 FF 3C EC E2 F0 90 A0 00 00"
)


class TestTypeBdsToBinary:
    def test_reference_800_bits(self) -> None:
        value = type_bds_to_binary(TypeIdentifier.DIGEST_SHA2_512_20, OUTER, 800)
        assert value.buffer == b"\x61" + OUTER[:63]
        assert len(value) == 64

    def test_default_bits(self) -> None:
        value = type_bds_to_binary(TypeIdentifier.DIGEST_SHA2_512, OUTER, 0)
        assert len(value) == -(-DEFAULT_BITS // 8)
        assert value.data() == OUTER[:17]

    def test_negative_bits_use_default(self) -> None:
        a = type_bds_to_binary(TypeIdentifier.DIGEST_SHA2_512, OUTER, -5)
        b = type_bds_to_binary(TypeIdentifier.DIGEST_SHA2_512, OUTER, 0)
        assert a == b

    def test_clamped_to_source(self) -> None:
        source = bytes(range(10))
        value = type_bds_to_binary(TypeIdentifier.NONCE, source, 800)
        assert len(value) == 10
        assert value.data() == source[:9]

    def test_offset(self) -> None:
        source = bytes(range(10))
        value = type_bds_to_binary(TypeIdentifier.NONCE, source, 800, offset=4)
        assert value.data() == source[4:9]

    def test_offset_at_end(self) -> None:
        value = type_bds_to_binary(TypeIdentifier.NONCE, b"abc", 800, offset=3)
        assert value.buffer == bytes([TypeIdentifier.NONCE])

    @pytest.mark.parametrize("offset", [-1, 4])
    def test_offset_out_of_range(self, offset: int) -> None:
        with pytest.raises(ValueError, match="offset"):
            type_bds_to_binary(TypeIdentifier.NONCE, b"abc", 800, offset=offset)

    def test_empty_source(self) -> None:
        value = type_bds_to_binary(TypeIdentifier.OID, b"", 140)
        assert value.buffer == bytes([TypeIdentifier.OID])

    def test_last_byte_not_masked(self) -> None:
        # 125 bits -> 16 bytes; the 3 unused bits of the last byte survive
        value = type_bds_to_binary(TypeIdentifier.NONCE, b"\xff" * 32, 125)
        assert len(value) == 16
        assert value.buffer[-1] == 0xFF

    def test_unknown_rejected(self) -> None:
        with pytest.raises(UnknownTypeIdentifierError):
            type_bds_to_binary(TypeIdentifier.UNKNOWN, OUTER, 140)


class TestUDFValue:
    def test_accessors(self) -> None:
        value = UDFValue(b"\x68abc")
        assert value.type_identifier() is TypeIdentifier.NONCE
        assert value.data() == b"abc"
        assert bytes(value) == b"\x68abc"
        assert len(value) == 4

    def test_immutable(self) -> None:
        value = UDFValue(b"\x68abc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.buffer = b"\x00"  # type: ignore[misc]

    def test_bytearray_copied(self) -> None:
        raw = bytearray(b"\x68abc")
        value = UDFValue(raw)  # type: ignore[arg-type]
        raw[0] = 0
        assert value.buffer == b"\x68abc"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="type byte"):
            UDFValue(b"")

    def test_unknown_code_only_fails_on_lookup(self) -> None:
        value = UDFValue(b"\x02payload")
        assert value.data() == b"payload"
        with pytest.raises(UnknownTypeIdentifierError):
            value.type_identifier()

    def test_equality_and_hash(self) -> None:
        assert UDFValue(b"\x00ab") == UDFValue(b"\x00ab")
        assert len({UDFValue(b"\x00ab"), UDFValue(b"\x00ab")}) == 1

    def test_presentation(self) -> None:
        value = type_bds_to_binary(TypeIdentifier.DIGEST_SHA2_512_20, OUTER, 800)
        assert str(value) == value.presentation_base32()
        assert value.presentation_base32(125) == "MGHB-JWIZ-J3LA-EEWD-GCT3-WX6H-C5W2"

    def test_presentation_custom_grouping(self) -> None:
        value = UDFValue(b"I am francis here!")
        assert value.presentation_base32(group_size=8, delimiter=" ") == (
            "JEQGC3JA MZZGC3TD NFZSA2DF OJSSC"
        )
