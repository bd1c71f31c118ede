"""UDF data model: digest algorithms, type identifiers and precision bounds.

The type identifier is the leading byte of every UDF value.  Its numeric
codes are the on-the-wire contract shared with every other UDF
implementation, so they must never be renumbered.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from udf.errors import UnknownTypeIdentifierError, UnsupportedAlgorithmError

# Precision bounds in bits
DEFAULT_BITS: int = 140
MINIMUM_BITS: int = 128
MAXIMUM_BITS: int = 440

# Content-type labels used by the facade's fixed-purpose fingerprints
PKIX_KEY_CONTENT_TYPE: str = "application/pkix-keyinfo"
UDF_ENCRYPTION_CONTENT_TYPE: str = "application/udf-encryption"

# Highest compression level produced by the classifier
MAX_COMPRESSION_LEVEL: int = 4


class DigestAlgorithm(StrEnum):
    """Hash algorithm used on the data path."""

    SHA2_512 = "sha2_512"
    SHA3_512 = "sha3_512"


class TypeIdentifier(IntEnum):
    """Purpose of a UDF value, stored as its first byte."""

    UNKNOWN = -1

    AUTHENTICATOR_HMAC_SHA2_512 = 0
    AUTHENTICATOR_HMAC_SHA3_512 = 1

    ENCRYPTION_HKDF_AES_512 = 32
    ENCRYPTION_SIGNATURE_HKDF_AES_512 = 33

    DIGEST_SHA3_512 = 80
    DIGEST_SHA3_512_20 = 81
    DIGEST_SHA3_512_30 = 82
    DIGEST_SHA3_512_40 = 83
    DIGEST_SHA3_512_50 = 84

    DIGEST_SHA2_512 = 96
    DIGEST_SHA2_512_20 = 97
    DIGEST_SHA2_512_30 = 98
    DIGEST_SHA2_512_40 = 99
    DIGEST_SHA2_512_50 = 100

    NONCE = 104
    OID = 112
    SHAMIR_SECRET = 144
    DERIVED_KEY = 200

    @property
    def serializable(self) -> bool:
        return self is not TypeIdentifier.UNKNOWN

    @classmethod
    def for_digest(
        cls, algorithm: DigestAlgorithm, compression_level: int
    ) -> TypeIdentifier:
        """Return the Digest variant for *algorithm* at *compression_level*.

        Level 0 maps to the uncompressed base variant.

        Raises:
            UnsupportedAlgorithmError: If *algorithm* has no digest variants.
            ValueError: If *compression_level* is outside 0..4.
        """
        variants = _DIGEST_VARIANTS.get(algorithm)
        if variants is None:
            msg = f"unexpected algorithm: {algorithm!r}"
            raise UnsupportedAlgorithmError(msg)
        if not 0 <= compression_level <= MAX_COMPRESSION_LEVEL:
            msg = f"compression level out of range: {compression_level}"
            raise ValueError(msg)
        return variants[compression_level]

    @classmethod
    def from_code(cls, code: int) -> TypeIdentifier:
        """Inverse lookup from a type byte.

        Signed bytes (-128..-1) are read as their unsigned value.

        Raises:
            UnknownTypeIdentifierError: If no variant owns *code*.
        """
        if -128 <= code < 0:
            code &= 0xFF
        tid = _BY_CODE.get(code)
        if tid is None:
            msg = f"unexpected type identifier code: {code}"
            raise UnknownTypeIdentifierError(msg)
        return tid


# Indexed by compression level
_DIGEST_VARIANTS: dict[DigestAlgorithm, tuple[TypeIdentifier, ...]] = {
    DigestAlgorithm.SHA2_512: (
        TypeIdentifier.DIGEST_SHA2_512,
        TypeIdentifier.DIGEST_SHA2_512_20,
        TypeIdentifier.DIGEST_SHA2_512_30,
        TypeIdentifier.DIGEST_SHA2_512_40,
        TypeIdentifier.DIGEST_SHA2_512_50,
    ),
    DigestAlgorithm.SHA3_512: (
        TypeIdentifier.DIGEST_SHA3_512,
        TypeIdentifier.DIGEST_SHA3_512_20,
        TypeIdentifier.DIGEST_SHA3_512_30,
        TypeIdentifier.DIGEST_SHA3_512_40,
        TypeIdentifier.DIGEST_SHA3_512_50,
    ),
}

_BY_CODE: dict[int, TypeIdentifier] = {
    tid.value: tid for tid in TypeIdentifier if tid.serializable
}
