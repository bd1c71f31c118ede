"""Cryptographic capabilities consumed by the codec.

The encoding pipeline never names a hash library directly.  It receives
callables satisfying the Protocols below, which lets tests drive it with
fixed vectors and lets callers swap in another backend.  The defaults use
``hashlib`` / ``hmac`` one-shot calls (fresh state per call) and the
``secrets`` CSPRNG.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol

from udf.types import DigestAlgorithm

# ── Capability protocols ────────────────────────────────────────────


class HashFn(Protocol):
    """Callable returning the 64-byte digest of *data*."""

    def __call__(self, data: bytes) -> bytes: ...  # noqa: D102


class MacFn(Protocol):
    """Callable returning the 64-byte keyed MAC of *message*."""

    def __call__(self, key: bytes, message: bytes) -> bytes: ...  # noqa: D102


class RandomBytesFn(Protocol):
    """Callable returning *n* random bytes."""

    def __call__(self, n: int) -> bytes: ...  # noqa: D102


# ── Default implementations ─────────────────────────────────────────


def sha2_512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def sha3_512(data: bytes) -> bytes:
    return hashlib.sha3_512(data).digest()


def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key, message, hashlib.sha512).digest()


def random_bytes(n: int) -> bytes:
    """Draw *n* bytes from the OS CSPRNG."""
    return secrets.token_bytes(n)


DEFAULT_HASHERS: Mapping[DigestAlgorithm, HashFn] = MappingProxyType(
    {
        DigestAlgorithm.SHA2_512: sha2_512,
        DigestAlgorithm.SHA3_512: sha3_512,
    }
)
