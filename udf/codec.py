"""UDF facade: named encode operations and parsing.

:class:`UDFCodec` composes the digest chain, compression classifier, type
registry, truncator and Base32 presenter.  It holds no mutable state; the
capabilities and configuration it is built with are fixed for its
lifetime.  Module-level functions delegate to a lazily created default
codec configured by :func:`udf.config.load_config`.

Usage::

    udf = content_digest_of_data_string(b"hello", "text/plain")
    value = parse(udf)
    value.type_identifier()  # TypeIdentifier.DIGEST_SHA2_512
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from udf import capabilities
from udf.binary import UDFValue, type_bds_to_binary
from udf.capabilities import DEFAULT_HASHERS, HashFn, MacFn, RandomBytesFn
from udf.compression import compression_level
from udf.config import CodecConfig, load_config
from udf.digest import (
    canonical_buffer,
    content_digest,
    keyed_authenticator,
    keyed_type,
    resolve_hasher,
)
from udf.errors import UnsupportedAlgorithmError
from udf.presentation import parse_base32
from udf.types import (
    DEFAULT_BITS,
    MAXIMUM_BITS,
    PKIX_KEY_CONTENT_TYPE,
    UDF_ENCRYPTION_CONTENT_TYPE,
    DigestAlgorithm,
    TypeIdentifier,
)

logger = structlog.get_logger()


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class UDFCodec:
    """Encoder / decoder for UDF values.

    Args:
        config: Presentation and digest defaults.
        hashers: Hash capability per digest algorithm.
        mac: HMAC-SHA-512 capability for keyed fingerprints.
        random_bytes: Random source for nonces and fresh keys.  Must be a
            CSPRNG outside of tests.
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        *,
        hashers: Mapping[DigestAlgorithm, HashFn] = DEFAULT_HASHERS,
        mac: MacFn = capabilities.hmac_sha512,
        random_bytes: RandomBytesFn = capabilities.random_bytes,
    ) -> None:
        self._config = config or CodecConfig()
        self._hashers = hashers
        self._mac = mac
        self._random_bytes = random_bytes

    @property
    def config(self) -> CodecConfig:
        return self._config

    # ── Helpers ─────────────────────────────────────────────────────

    def _algorithm(self, algorithm: DigestAlgorithm | str | None) -> DigestAlgorithm:
        if algorithm is None:
            return self._config.digest.digest_algorithm
        try:
            return DigestAlgorithm(algorithm)
        except ValueError as exc:
            msg = f"unexpected algorithm: {algorithm!r}"
            raise UnsupportedAlgorithmError(msg) from exc

    def _bits(self, bits: int) -> int:
        return bits if bits > 0 else self._config.digest.bits

    def present(self, value: UDFValue, bits: int = 0) -> str:
        """Render *value* with the configured grouping."""
        pres = self._config.presentation
        return value.presentation_base32(
            bits, group_size=pres.group_size, delimiter=pres.delimiter
        )

    def _encode(
        self,
        data: bytes,
        content_type: str,
        bits: int,
        algorithm: DigestAlgorithm | str | None,
        key: str | None,
        *,
        prehashed: bool,
    ) -> UDFValue:
        algo = self._algorithm(algorithm)
        hasher = resolve_hasher(algo, self._hashers)

        if key is None:
            outer = content_digest(
                data,
                content_type,
                algo,
                prehashed=prehashed,
                hashers=self._hashers,
            )
            type_identifier = TypeIdentifier.for_digest(algo, compression_level(outer))
            value = type_bds_to_binary(type_identifier, outer, self._bits(bits))
        else:
            keyed_type(algo)
            inner = data if prehashed else hasher(data)
            type_identifier, mac = keyed_authenticator(
                canonical_buffer(inner, content_type), key, algo, mac=self._mac
            )
            value = type_bds_to_binary(type_identifier, mac, self._bits(bits))

        logger.debug(
            "udf_encoded",
            type_identifier=type_identifier.name,
            algorithm=str(algo),
            bits=8 * len(value),
            keyed=key is not None,
        )
        return value

    # ── Content fingerprints ────────────────────────────────────────

    def data_to_udf_binary(
        self,
        data: bytes | str,
        content_type: str,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
        key: str | None = None,
    ) -> UDFValue:
        """Fingerprint raw *data* labelled with *content_type*.

        Without *key* the result is a Digest value whose type encodes the
        algorithm and compression level.  With *key* it is an HMAC-SHA-512
        Authenticator (``SHA2_512`` only).

        Args:
            data: Content to fingerprint; ``str`` is encoded as UTF-8.
            content_type: Label bound into the digest.
            bits: Precision; ``<= 0`` selects the configured default.
            algorithm: Digest algorithm; ``None`` selects the configured one.
            key: Optional key for a keyed fingerprint.

        Raises:
            UnsupportedAlgorithmError: Before any hashing, if *algorithm* is
                unknown or not usable with *key*.
        """
        return self._encode(
            _as_bytes(data), content_type, bits, algorithm, key, prehashed=False
        )

    def digest_to_udf_binary(
        self,
        digest: bytes,
        content_type: str,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
        key: str | None = None,
    ) -> UDFValue:
        """Like :meth:`data_to_udf_binary` for an already computed digest."""
        return self._encode(
            _as_bytes(digest), content_type, bits, algorithm, key, prehashed=True
        )

    def content_digest_of_data_string(
        self,
        data: bytes | str,
        content_type: str,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
        key: str | None = None,
    ) -> str:
        value = self.data_to_udf_binary(data, content_type, bits, algorithm, key)
        return self.present(value)

    def content_digest_of_digest_string(
        self,
        digest: bytes,
        content_type: str,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
        key: str | None = None,
    ) -> str:
        value = self.digest_to_udf_binary(digest, content_type, bits, algorithm, key)
        return self.present(value)

    def content_digest_of_udf(
        self,
        udf_string: str,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
    ) -> str:
        """Fingerprint an existing UDF presentation string.

        The UTF-8 text stands in for the inner digest.  Precision defaults
        to twice ``DEFAULT_BITS`` and never exceeds ``MAXIMUM_BITS``.
        """
        bits = bits if bits > 0 else 2 * DEFAULT_BITS
        bits = min(bits, MAXIMUM_BITS)
        value = self.digest_to_udf_binary(
            udf_string.encode("utf-8"), UDF_ENCRYPTION_CONTENT_TYPE, bits, algorithm
        )
        return self.present(value)

    def from_key_info(
        self,
        data: bytes,
        bits: int = 0,
        algorithm: DigestAlgorithm | str | None = None,
    ) -> UDFValue:
        """Fingerprint a DER-encoded PKIX SubjectPublicKeyInfo blob."""
        return self.data_to_udf_binary(data, PKIX_KEY_CONTENT_TYPE, bits, algorithm)

    # ── Typed data ──────────────────────────────────────────────────

    def type_bds_to_string(
        self,
        type_identifier: TypeIdentifier,
        source: bytes,
        bits: int = 0,
        offset: int = 0,
    ) -> str:
        return self.present(type_bds_to_binary(type_identifier, source, bits, offset))

    def nonce(self, bits: int = 0) -> str:
        """Random nonce of *bits* bits (default ``DEFAULT_BITS - 8``)."""
        bits = bits if bits > 0 else DEFAULT_BITS - 8
        return self.nonce_from_bytes(self._random_bytes(bits // 8), bits)

    def nonce_from_bytes(self, data: bytes, bits: int | None = None) -> str:
        """Present *data* as a Nonce; precision includes the type byte."""
        bits = 8 * len(data) if bits is None else bits
        return self.type_bds_to_string(TypeIdentifier.NONCE, data, bits + 8)

    def symmetric_key(
        self, type_identifier: TypeIdentifier, key: int | bytes = 0
    ) -> str:
        """Present key material tagged with *type_identifier*.

        Args:
            type_identifier: Purpose tag for the key.
            key: Either a bit count, for which fresh random bytes are drawn
                (``<= 0`` selects ``DEFAULT_BITS - 8``), or the raw key bytes.
        """
        if isinstance(key, int):
            bits = key if key > 0 else DEFAULT_BITS - 8
            data = self._random_bytes(bits // 8)
        else:
            data = bytes(key)
            bits = 8 * len(data)
        return self.type_bds_to_string(type_identifier, data, bits + 8)

    def authentication_key(self, key: int | bytes = 0) -> str:
        return self.symmetric_key(TypeIdentifier.AUTHENTICATOR_HMAC_SHA2_512, key)

    def encryption_key(self, key: int | bytes = 0) -> str:
        return self.symmetric_key(TypeIdentifier.ENCRYPTION_HKDF_AES_512, key)

    def key_share(self, data: bytes) -> str:
        """Present a Shamir secret share at full precision."""
        return self.type_bds_to_string(
            TypeIdentifier.SHAMIR_SECRET, data, 8 * len(data) + 8
        )

    def symmetric_key_udf(self, data: bytes) -> str:
        """Address-like fingerprint of the encryption key *data*."""
        return self.content_digest_of_udf(self.encryption_key(data))

    # ── Decode ──────────────────────────────────────────────────────

    def parse(self, udf_string: str) -> UDFValue:
        """Decode a presentation string; the type byte is not checked here."""
        buffer = parse_base32(udf_string, delimiter=self._config.presentation.delimiter)
        return UDFValue(buffer)


# ── Module-level API ────────────────────────────────────────────────

_default_codec: UDFCodec | None = None


def default_codec() -> UDFCodec:
    """Return the shared codec, loading configuration on first use."""
    global _default_codec  # noqa: PLW0603
    if _default_codec is None:
        _default_codec = UDFCodec(load_config())
    return _default_codec


def set_default_codec(codec: UDFCodec | None) -> None:
    """Replace the shared codec; ``None`` reloads configuration on next use."""
    global _default_codec  # noqa: PLW0603
    _default_codec = codec


def data_to_udf_binary(
    data: bytes | str,
    content_type: str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    key: str | None = None,
) -> UDFValue:
    return default_codec().data_to_udf_binary(data, content_type, bits, algorithm, key)


def digest_to_udf_binary(
    digest: bytes,
    content_type: str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    key: str | None = None,
) -> UDFValue:
    return default_codec().digest_to_udf_binary(
        digest, content_type, bits, algorithm, key
    )


def content_digest_of_data_string(
    data: bytes | str,
    content_type: str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    key: str | None = None,
) -> str:
    return default_codec().content_digest_of_data_string(
        data, content_type, bits, algorithm, key
    )


def content_digest_of_digest_string(
    digest: bytes,
    content_type: str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
    key: str | None = None,
) -> str:
    return default_codec().content_digest_of_digest_string(
        digest, content_type, bits, algorithm, key
    )


def content_digest_of_udf(
    udf_string: str,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
) -> str:
    return default_codec().content_digest_of_udf(udf_string, bits, algorithm)


def from_key_info(
    data: bytes,
    bits: int = 0,
    algorithm: DigestAlgorithm | str | None = None,
) -> UDFValue:
    return default_codec().from_key_info(data, bits, algorithm)


def nonce(bits: int = 0) -> str:
    return default_codec().nonce(bits)


def symmetric_key(type_identifier: TypeIdentifier, key: int | bytes = 0) -> str:
    return default_codec().symmetric_key(type_identifier, key)


def authentication_key(key: int | bytes = 0) -> str:
    return default_codec().authentication_key(key)


def encryption_key(key: int | bytes = 0) -> str:
    return default_codec().encryption_key(key)


def key_share(data: bytes) -> str:
    return default_codec().key_share(data)


def symmetric_key_udf(data: bytes) -> str:
    return default_codec().symmetric_key_udf(data)


def parse(udf_string: str) -> UDFValue:
    return default_codec().parse(udf_string)
