"""Uniform Data Fingerprint (UDF) codec.

Typed, precision-truncatable digest identifiers presented as grouped
Base32 strings.
"""

from __future__ import annotations

from udf.binary import UDFValue, type_bds_to_binary
from udf.codec import (
    UDFCodec,
    authentication_key,
    content_digest_of_data_string,
    content_digest_of_digest_string,
    content_digest_of_udf,
    data_to_udf_binary,
    default_codec,
    digest_to_udf_binary,
    encryption_key,
    from_key_info,
    key_share,
    nonce,
    parse,
    symmetric_key,
    symmetric_key_udf,
)
from udf.errors import (
    InvalidDigestLengthError,
    UDFDecodeError,
    UDFError,
    UnknownTypeIdentifierError,
    UnsupportedAlgorithmError,
)
from udf.types import (
    DEFAULT_BITS,
    MAXIMUM_BITS,
    MINIMUM_BITS,
    DigestAlgorithm,
    TypeIdentifier,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BITS",
    "MAXIMUM_BITS",
    "MINIMUM_BITS",
    "DigestAlgorithm",
    "InvalidDigestLengthError",
    "TypeIdentifier",
    "UDFCodec",
    "UDFDecodeError",
    "UDFError",
    "UDFValue",
    "UnknownTypeIdentifierError",
    "UnsupportedAlgorithmError",
    "__version__",
    "authentication_key",
    "content_digest_of_data_string",
    "content_digest_of_digest_string",
    "content_digest_of_udf",
    "data_to_udf_binary",
    "default_codec",
    "digest_to_udf_binary",
    "encryption_key",
    "from_key_info",
    "key_share",
    "nonce",
    "parse",
    "symmetric_key",
    "symmetric_key_udf",
    "type_bds_to_binary",
]
