"""Domain-separated digest chain and its keyed (HMAC) variant.

A UDF content digest binds the content-type label into the hash::

    inner     = H(data)                      # skipped for pre-hashed input
    canonical = UTF8(content_type) + ":" + inner
    outer     = H(canonical)

so identical bytes labelled with different content types never collide.
The keyed variant replaces the outer hash with ``HMAC(key, canonical)``.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from udf.capabilities import DEFAULT_HASHERS, HashFn, MacFn, hmac_sha512
from udf.errors import UnsupportedAlgorithmError
from udf.types import DigestAlgorithm, TypeIdentifier

logger = structlog.get_logger()

TAG_SEPARATOR: bytes = b":"

# Keyed fingerprints are only defined for these algorithms
_KEYED_TYPES: dict[DigestAlgorithm, TypeIdentifier] = {
    DigestAlgorithm.SHA2_512: TypeIdentifier.AUTHENTICATOR_HMAC_SHA2_512,
}


def canonical_buffer(inner_digest: bytes, content_type: str) -> bytes:
    """Build ``UTF8(content_type) + b":" + inner_digest``."""
    return content_type.encode("utf-8") + TAG_SEPARATOR + inner_digest


def resolve_hasher(
    algorithm: DigestAlgorithm,
    hashers: Mapping[DigestAlgorithm, HashFn] = DEFAULT_HASHERS,
) -> HashFn:
    """Look up the hash capability for *algorithm*.

    Raises:
        UnsupportedAlgorithmError: If no hasher is registered.
    """
    hasher = hashers.get(algorithm)
    if hasher is None:
        msg = f"unexpected algorithm: {algorithm!r}"
        raise UnsupportedAlgorithmError(msg)
    return hasher


def content_digest(
    data: bytes,
    content_type: str,
    algorithm: DigestAlgorithm,
    *,
    prehashed: bool = False,
    hashers: Mapping[DigestAlgorithm, HashFn] = DEFAULT_HASHERS,
) -> bytes:
    """Compute the outer digest of *data* under *content_type*.

    Args:
        data: Raw content, or its digest when *prehashed* is set.
        content_type: Label bound into the digest (usually a MIME type).
        algorithm: Hash used for both the inner and outer stage.
        prehashed: Treat *data* as the inner digest.
        hashers: Hash capability table.

    Returns:
        The 64-byte outer digest.
    """
    hasher = resolve_hasher(algorithm, hashers)
    inner = data if prehashed else hasher(data)
    return hasher(canonical_buffer(inner, content_type))


def keyed_type(algorithm: DigestAlgorithm) -> TypeIdentifier:
    """Return the Authenticator type for *algorithm*.

    Raises:
        UnsupportedAlgorithmError: For any algorithm without a keyed variant.
    """
    type_identifier = _KEYED_TYPES.get(algorithm)
    if type_identifier is None:
        logger.warning("keyed_algorithm_rejected", algorithm=str(algorithm))
        msg = f"keyed fingerprint not supported for {algorithm!r}"
        raise UnsupportedAlgorithmError(msg)
    return type_identifier


def keyed_authenticator(
    canonical: bytes,
    key: str,
    algorithm: DigestAlgorithm,
    *,
    mac: MacFn = hmac_sha512,
) -> tuple[TypeIdentifier, bytes]:
    """MAC the canonical buffer with *key*.

    Args:
        canonical: Output of :func:`canonical_buffer`.
        key: Shared secret, encoded as UTF-8.
        algorithm: Must be ``SHA2_512``.
        mac: HMAC-SHA-512 capability.

    Returns:
        ``(type_identifier, mac_bytes)``.

    Raises:
        UnsupportedAlgorithmError: For any algorithm without a keyed variant.
    """
    type_identifier = keyed_type(algorithm)
    return type_identifier, mac(key.encode("utf-8"), canonical)
