"""Codec configuration.

Loads presentation and digest defaults from ``~/.udf/config.toml`` (or the
file named by ``$UDF_CONFIG``) with environment variable overrides.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import TypeVar

import structlog

from udf.types import DEFAULT_BITS, MAXIMUM_BITS, MINIMUM_BITS, DigestAlgorithm

logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = Path.home() / ".udf" / "config.toml"
CONFIG_PATH_ENV = "UDF_CONFIG"

T = TypeVar("T")


@dataclass(frozen=True)
class PresentationConfig:
    """Base32 grouping settings."""

    group_size: int = 4
    delimiter: str = "-"


@dataclass(frozen=True)
class DigestConfig:
    """Defaults applied when a caller passes no algorithm / precision."""

    algorithm: str = DigestAlgorithm.SHA2_512.value
    bits: int = DEFAULT_BITS

    @property
    def digest_algorithm(self) -> DigestAlgorithm:
        return DigestAlgorithm(self.algorithm)


@dataclass(frozen=True)
class CodecConfig:
    """Root configuration container."""

    presentation: PresentationConfig = field(default_factory=PresentationConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)


def _env_override(section: str, key: str) -> str | None:
    """Check for UDF_{SECTION}_{KEY} environment variable."""
    env_key = f"UDF_{section.upper()}_{key.upper()}"
    return os.environ.get(env_key)


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string value to the target type."""
    if target_type is int:
        return int(value)
    return value


# Configuration value constraints
_VALUE_CONSTRAINTS: dict[str, tuple[int, int]] = {
    "group_size": (1, 16),
    "bits": (MINIMUM_BITS, MAXIMUM_BITS),
}

# Allowed values for string enums
_ALLOWED_VALUES: dict[str, frozenset[str]] = {
    "algorithm": frozenset(a.value for a in DigestAlgorithm),
}

# Characters a delimiter may not contain (Base32 alphabet, padding)
_BASE32_CHARS: frozenset[str] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567=")


def _validate_value(key: str, value: object) -> object:
    """Validate a config value against known constraints."""
    if key in _VALUE_CONSTRAINTS and isinstance(value, int):
        lo, hi = _VALUE_CONSTRAINTS[key]
        if not (lo <= value <= hi):
            logger.warning(
                "config_value_out_of_range",
                key=key,
                value=value,
                min=lo,
                max=hi,
            )
            return max(lo, min(hi, value))
    if key in _ALLOWED_VALUES and isinstance(value, str):
        if value.lower() not in _ALLOWED_VALUES[key]:
            logger.warning(
                "config_invalid_value",
                key=key,
                value=value,
                allowed=sorted(_ALLOWED_VALUES[key]),
            )
            return None  # Will use default
        return value.lower()
    if key == "delimiter" and isinstance(value, str):
        if _BASE32_CHARS & set(value.upper()):
            logger.warning("config_invalid_value", key=key, value=value)
            return None
    return value


def _build_section(
    cls: type[T], toml_section: dict[str, object], section_name: str
) -> T:
    """Build a dataclass instance from TOML data + env overrides."""
    kwargs: dict[str, object] = {}
    for f in dataclass_fields(cls):  # type: ignore[arg-type]
        raw = toml_section.get(f.name)
        env_val = _env_override(section_name, f.name)
        if env_val is not None:
            try:
                raw = _coerce(env_val, type(f.default))
            except ValueError:
                logger.warning(
                    "config_env_unparseable", section=section_name, key=f.name
                )
                raw = None
        if raw is not None and type(raw) is not type(f.default):
            logger.warning(
                "config_invalid_value",
                section=section_name,
                key=f.name,
                value=raw,
                expected=type(f.default).__name__,
            )
            raw = None
        if raw is not None:
            validated = _validate_value(f.name, raw)
            if validated is not None:
                kwargs[f.name] = validated
    return cls(**kwargs)


def load_config(config_path: Path | None = None) -> CodecConfig:
    """Load configuration from TOML file with environment variable overrides.

    Priority: env vars > config.toml > defaults.

    Args:
        config_path: Path to config file.  Defaults to ``$UDF_CONFIG`` or
            ``~/.udf/config.toml``.

    Returns:
        Populated CodecConfig instance.
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    path = config_path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
    raw: dict[str, object] = {}

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        logger.info("config_loaded", path=str(path))
    else:
        logger.debug("config_default", path=str(path), reason="file not found")

    presentation = _build_section(
        PresentationConfig,
        raw.get("presentation", {}),  # type: ignore[arg-type]
        "presentation",
    )
    digest = _build_section(DigestConfig, raw.get("digest", {}), "digest")  # type: ignore[arg-type]

    return CodecConfig(presentation=presentation, digest=digest)
