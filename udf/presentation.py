"""Grouped Base32 presentation of UDF buffers.

Buffers are rendered with the RFC 4648 alphabet, padding stripped, and
split into groups of four characters (20 bits each) joined by ``-``::

    MGHB-JWIZ-J3LA-EEWD-GCT3-WX6H-C5W2

A bit limit keeps only the leading groups, which yields a shorter,
lower-precision prefix of a value stored at full precision.
"""

from __future__ import annotations

import base64
import binascii

import structlog

from udf.errors import UDFDecodeError

logger = structlog.get_logger()

DEFAULT_GROUP_SIZE: int = 4
DEFAULT_DELIMITER: str = "-"

# Bits carried by one Base32 character
_BITS_PER_CHAR: int = 5


def chunk(text: str, size: int) -> list[str]:
    """Split *text* into *size*-character groups; the last may be shorter."""
    if size <= 0:
        msg = f"chunk size must be positive, got {size}"
        raise ValueError(msg)
    return [text[i : i + size] for i in range(0, len(text), size)]


def base32_no_pad(buffer: bytes) -> str:
    """Base32-encode *buffer* and drop the ``=`` padding."""
    return base64.b32encode(buffer).decode("ascii").rstrip("=")


def presentation_base32(
    buffer: bytes,
    *,
    group_size: int = DEFAULT_GROUP_SIZE,
    delimiter: str = DEFAULT_DELIMITER,
    bits: int = 0,
) -> str:
    """Render *buffer* as delimited Base32 groups.

    Args:
        buffer: Bytes to present (type byte first for UDF values).
        group_size: Characters per group.
        delimiter: Group separator.
        bits: If positive, emit only enough groups to cover *bits*
            (``ceil(bits / 20)`` for the default group size).

    Returns:
        The presentation string.
    """
    groups = chunk(base32_no_pad(buffer), group_size)
    if bits > 0:
        bits_per_group = group_size * _BITS_PER_CHAR
        wanted = -(-bits // bits_per_group)
        groups = groups[: min(wanted, len(groups))]
    return delimiter.join(groups)


def parse_base32(text: str, *, delimiter: str = DEFAULT_DELIMITER) -> bytes:
    """Decode a presentation string back to bytes.

    The wire delimiter ``-``, any other configured *delimiter* and
    surrounding whitespace are removed and lower case is accepted before
    decoding.

    Raises:
        UDFDecodeError: If *text* is empty or not valid unpadded Base32.
    """
    compact = text.strip()
    if delimiter:
        compact = compact.replace(delimiter, "")
    compact = compact.replace(DEFAULT_DELIMITER, "").upper()
    if not compact:
        logger.warning("udf_parse_failed", reason="empty")
        msg = "empty UDF presentation"
        raise UDFDecodeError(msg)

    padded = compact + "=" * (-len(compact) % 8)
    try:
        return base64.b32decode(padded)
    except (binascii.Error, ValueError) as exc:
        logger.warning("udf_parse_failed", reason=str(exc), length=len(compact))
        msg = f"malformed UDF presentation: {exc}"
        raise UDFDecodeError(msg) from exc
