"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from udf.codec import UDFCodec, set_default_codec
from udf.config import CodecConfig


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep the user's config file and UDF_* variables out of tests."""
    monkeypatch.setenv("UDF_CONFIG", str(tmp_path / "no-such-config.toml"))
    for key in (
        "UDF_PRESENTATION_GROUP_SIZE",
        "UDF_PRESENTATION_DELIMITER",
        "UDF_DIGEST_ALGORITHM",
        "UDF_DIGEST_BITS",
    ):
        monkeypatch.delenv(key, raising=False)
    set_default_codec(None)
    yield
    set_default_codec(None)


@pytest.fixture
def codec() -> UDFCodec:
    return UDFCodec(CodecConfig())


class FixedRandom:
    """Random source replaying a fixed byte string and recording requests."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.requests: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.requests.append(n)
        return self._data[:n]


@pytest.fixture
def fixed_random() -> FixedRandom:
    return FixedRandom(bytes(range(1, 65)))


@pytest.fixture
def make_random() -> type[FixedRandom]:
    """Factory for random sources replaying caller-supplied bytes."""
    return FixedRandom
