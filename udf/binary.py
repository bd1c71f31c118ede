"""Binary UDF values and precision truncation."""

from __future__ import annotations

from dataclasses import dataclass

from udf.errors import UnknownTypeIdentifierError
from udf.presentation import (
    DEFAULT_DELIMITER,
    DEFAULT_GROUP_SIZE,
    presentation_base32,
)
from udf.types import DEFAULT_BITS, TypeIdentifier


@dataclass(frozen=True)
class UDFValue:
    """Immutable binary UDF: one type byte followed by the payload.

    The type byte is only interpreted when :meth:`type_identifier` is
    called, so a parsed value with an unregistered code can still be
    inspected and re-presented.
    """

    buffer: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.buffer, bytes):
            object.__setattr__(self, "buffer", bytes(self.buffer))
        if not self.buffer:
            msg = "UDF value must contain at least the type byte"
            raise ValueError(msg)

    def type_identifier(self) -> TypeIdentifier:
        """Interpret byte 0 as a type code.

        Raises:
            UnknownTypeIdentifierError: If the code is not registered.
        """
        return TypeIdentifier.from_code(self.buffer[0])

    def data(self) -> bytes:
        """Payload without the type byte."""
        return self.buffer[1:]

    def presentation_base32(
        self,
        bits: int = 0,
        *,
        group_size: int = DEFAULT_GROUP_SIZE,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> str:
        """Grouped Base32 text, limited to *bits* when positive."""
        return presentation_base32(
            self.buffer, group_size=group_size, delimiter=delimiter, bits=bits
        )

    def __bytes__(self) -> bytes:
        return self.buffer

    def __len__(self) -> int:
        return len(self.buffer)

    def __str__(self) -> str:
        return self.presentation_base32()


def type_bds_to_binary(
    type_identifier: TypeIdentifier,
    source: bytes,
    bits: int = 0,
    offset: int = 0,
) -> UDFValue:
    """Tag *source* with *type_identifier* and size it to *bits* precision.

    The requested precision counts the type byte.  Only whole bytes are
    dropped: the final retained byte is copied verbatim even when *bits* is
    not a multiple of 8.

    Args:
        type_identifier: Tag written to byte 0.
        source: Digest or key material.
        bits: Output precision; ``<= 0`` selects ``DEFAULT_BITS``.
        offset: Start position in *source*.

    Returns:
        A new :class:`UDFValue` of ``ceil(bits / 8)`` bytes, never reading
        past the end of *source*.
    """
    if not type_identifier.serializable:
        msg = "the UNKNOWN type identifier cannot be serialized"
        raise UnknownTypeIdentifierError(msg)
    if not 0 <= offset <= len(source):
        msg = f"offset {offset} outside source of {len(source)} bytes"
        raise ValueError(msg)

    effective = DEFAULT_BITS if bits <= 0 else bits
    effective = min(effective, 8 * (len(source) - offset))
    byte_count = max(1, -(-effective // 8))

    payload = source[offset : offset + byte_count - 1]
    return UDFValue(bytes((type_identifier.value,)) + bytes(payload))
