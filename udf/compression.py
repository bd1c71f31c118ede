"""Trailing-zero compression classification of 512-bit digests.

A digest whose low-order bits happen to be zero (a "vanity" digest found by
search) records that fact in its type tag.  The level only depends on the
digest, never on the precision it is later truncated to.
"""

from __future__ import annotations

from udf.errors import InvalidDigestLengthError

# Required digest length (SHA2-512 / SHA3-512 output)
DIGEST_LENGTH: int = 64

# Trailing-zero counts at which levels 1..4 start
_BREAKPOINTS: tuple[int, ...] = (20, 30, 40, 50)


def trailing_zero_bits(digest: bytes) -> int:
    """Count contiguous zero bits from the least-significant end of *digest*.

    The last byte is least significant; within a byte bit 0 is scanned first.
    An all-zero buffer returns ``8 * len(digest)``.
    """
    count = 0
    for byte in reversed(digest):
        if byte == 0:
            count += 8
            continue
        # isolate the lowest set bit
        count += (byte & -byte).bit_length() - 1
        break
    return count


def compression_level(digest: bytes) -> int:
    """Classify *digest* by its trailing zero bits.

    Returns:
        0 below 20 zero bits, 1 below 30, 2 below 40, 3 below 50, else 4.

    Raises:
        InvalidDigestLengthError: If *digest* is not exactly 64 bytes.
    """
    if len(digest) != DIGEST_LENGTH:
        msg = f"digest must be {DIGEST_LENGTH} bytes, got {len(digest)}"
        raise InvalidDigestLengthError(msg)

    zeros = trailing_zero_bits(digest)
    level = 0
    for breakpoint_bits in _BREAKPOINTS:
        if zeros < breakpoint_bits:
            break
        level += 1
    return level
