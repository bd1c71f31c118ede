"""Structured error codes and the codec's exception hierarchy.

Every exception raised by the codec derives from :class:`UDFError` and
carries a catalog entry (code, message, resolution).  Exceptions also
subclass the matching builtin (``ValueError`` / ``LookupError``) so callers
that only know the builtin contract still catch them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error category classification."""

    ALGORITHM = "ALGORITHM"
    DIGEST = "DIGEST"
    TYPE = "TYPE"
    DECODE = "DECODE"


@dataclass(frozen=True)
class ErrorInfo:
    """Catalog entry describing one failure mode."""

    code: str
    category: ErrorCategory
    message: str
    resolution: str

    def to_dict(self) -> dict[str, object]:
        return {
            "error": {
                "code": self.code,
                "category": self.category.value,
                "message": self.message,
                "resolution": self.resolution,
            },
        }

    def format(self) -> str:
        return f"Error [{self.code}]: {self.message}\nResolution: {self.resolution}"


# ── Error catalog ─────────────────────────────────────────────────

ERRORS: dict[str, ErrorInfo] = {
    "E001": ErrorInfo(
        code="UDF_E001",
        category=ErrorCategory.ALGORITHM,
        message="Unsupported digest algorithm",
        resolution=(
            "Use SHA2_512 or SHA3_512; keyed fingerprints support SHA2_512 only"
        ),
    ),
    "E002": ErrorInfo(
        code="UDF_E002",
        category=ErrorCategory.DIGEST,
        message="Digest must be exactly 64 bytes",
        resolution="Pass the full SHA-512 / SHA3-512 output, not a truncation",
    ),
    "E003": ErrorInfo(
        code="UDF_E003",
        category=ErrorCategory.TYPE,
        message="No such type identifier",
        resolution="The leading byte is not a registered UDF type code",
    ),
    "E004": ErrorInfo(
        code="UDF_E004",
        category=ErrorCategory.DECODE,
        message="Malformed Base32 presentation",
        resolution=(
            "Check the string for characters outside A-Z / 2-7 or a "
            "truncated final group"
        ),
    ),
}


def get_error(code: str) -> ErrorInfo | None:
    """Look up an error by short code (e.g. 'E001')."""
    return ERRORS.get(code)


def format_error(code: str) -> str:
    """Format an error message by code."""
    err = ERRORS.get(code)
    if err is None:
        return f"Unknown error: {code}"
    return err.format()


# ── Exceptions ────────────────────────────────────────────────────


class UDFError(Exception):
    """Base class for all codec errors."""

    error_code: str = ""

    @property
    def info(self) -> ErrorInfo | None:
        return ERRORS.get(self.error_code)


class UnsupportedAlgorithmError(UDFError, ValueError):
    """Digest algorithm is not available for the requested path."""

    error_code = "E001"


class InvalidDigestLengthError(UDFError, ValueError):
    """A fixed-length digest precondition was violated."""

    error_code = "E002"


class UnknownTypeIdentifierError(UDFError, LookupError):
    """Type code has no registered owner."""

    error_code = "E003"


class UDFDecodeError(UDFError, ValueError):
    """Presentation string could not be decoded."""

    error_code = "E004"
