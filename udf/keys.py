"""UDF fingerprints of public keys.

A key fingerprint is the data-path UDF of the key's DER-encoded PKIX
``SubjectPublicKeyInfo``, labelled ``application/pkix-keyinfo``.  Any
``cryptography`` public key object (Ed25519, X25519, EC, RSA, ...) works.

Usage::

    from cryptography.hazmat.primitives.asymmetric.ed25519 import (
        Ed25519PrivateKey,
    )

    public_key = Ed25519PrivateKey.generate().public_key()
    fingerprint_public_key(public_key).presentation_base32()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from udf.codec import UDFCodec, default_codec

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

    from udf.binary import UDFValue
    from udf.types import DigestAlgorithm

logger = structlog.get_logger()


def key_info_bytes(public_key: PublicKeyTypes) -> bytes:
    """Serialize *public_key* as DER SubjectPublicKeyInfo."""
    from cryptography.hazmat.primitives.serialization import (
        Encoding,
        PublicFormat,
    )

    return public_key.public_bytes(
        encoding=Encoding.DER,
        format=PublicFormat.SubjectPublicKeyInfo,
    )


def load_public_key_pem(pem: bytes | str) -> PublicKeyTypes:
    """Load a PEM ``PUBLIC KEY`` block."""
    from cryptography.hazmat.primitives.serialization import load_pem_public_key

    if isinstance(pem, str):
        pem = pem.encode("ascii")
    return load_pem_public_key(pem)


def fingerprint_public_key(
    public_key: PublicKeyTypes,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    *,
    codec: UDFCodec | None = None,
) -> UDFValue:
    """UDF fingerprint of *public_key*.

    Args:
        public_key: A ``cryptography`` public key.
        bits: Precision; ``<= 0`` selects the configured default.
        algorithm: Digest algorithm; ``None`` selects the configured one.
        codec: Codec to use; defaults to the shared one.

    Returns:
        Binary UDF value tagged with a Digest type identifier.
    """
    codec = codec or default_codec()
    value = codec.from_key_info(key_info_bytes(public_key), bits, algorithm)
    logger.debug(
        "key_fingerprinted",
        key_type=type(public_key).__name__,
        type_identifier=value.type_identifier().name,
    )
    return value


def fingerprint_public_key_pem(
    pem: bytes | str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    *,
    codec: UDFCodec | None = None,
) -> str:
    """Presentation of the fingerprint of a PEM-encoded public key."""
    codec = codec or default_codec()
    value = fingerprint_public_key(
        load_public_key_pem(pem), bits, algorithm, codec=codec
    )
    return codec.present(value)
