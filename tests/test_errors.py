"""Tests for udf.errors — structured error codes and exceptions."""

from __future__ import annotations

import pytest

from udf.errors import (
    ERRORS,
    ErrorCategory,
    ErrorInfo,
    InvalidDigestLengthError,
    UDFDecodeError,
    UDFError,
    UnknownTypeIdentifierError,
    UnsupportedAlgorithmError,
    format_error,
    get_error,
)


class TestErrorCatalog:
    def test_codes_unique(self) -> None:
        codes = [e.code for e in ERRORS.values()]
        assert len(codes) == len(set(codes))

    def test_codes_prefixed(self) -> None:
        for short, err in ERRORS.items():
            assert err.code == f"UDF_{short}"

    def test_get_error(self) -> None:
        err = get_error("E001")
        assert err is not None
        assert err.category is ErrorCategory.ALGORITHM

    def test_get_error_unknown(self) -> None:
        assert get_error("E999") is None

    def test_format_error(self) -> None:
        s = format_error("E004")
        assert "UDF_E004" in s
        assert "Resolution:" in s

    def test_format_error_unknown(self) -> None:
        assert format_error("E999") == "Unknown error: E999"

    def test_to_dict(self) -> None:
        err = ErrorInfo(
            code="TEST_001",
            category=ErrorCategory.DECODE,
            message="bad",
            resolution="fix it",
        )
        d = err.to_dict()
        assert d["error"] == {
            "code": "TEST_001",
            "category": "DECODE",
            "message": "bad",
            "resolution": "fix it",
        }


class TestExceptions:
    @pytest.mark.parametrize(
        ("exc_type", "builtin", "short"),
        [
            (UnsupportedAlgorithmError, ValueError, "E001"),
            (InvalidDigestLengthError, ValueError, "E002"),
            (UnknownTypeIdentifierError, LookupError, "E003"),
            (UDFDecodeError, ValueError, "E004"),
        ],
    )
    def test_hierarchy(
        self, exc_type: type[UDFError], builtin: type[Exception], short: str
    ) -> None:
        exc = exc_type("boom")
        assert isinstance(exc, UDFError)
        assert isinstance(exc, builtin)
        assert exc.info is ERRORS[short]
        assert str(exc) == "boom"

    def test_base_has_no_info(self) -> None:
        assert UDFError("x").info is None
