# File: src/dscoverage/errors.py
"""Error ADTs for recoverable analysis and configuration failures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, assert_never

from pydantic import ValidationError


@dataclass(frozen=True)
class ParseFailed:
    """Source text could not be parsed into a syntax tree."""

    message: str
    line: int | None = None
    kind: Literal["ParseFailed"] = "ParseFailed"


@dataclass(frozen=True)
class ConfigNotFound:
    """An explicitly requested configuration file does not exist."""

    path: Path
    kind: Literal["ConfigNotFound"] = "ConfigNotFound"


@dataclass(frozen=True)
class ConfigParseFailed:
    """Configuration file exists but is not valid TOML."""

    path: Path
    message: str
    kind: Literal["ConfigParseFailed"] = "ConfigParseFailed"


@dataclass(frozen=True)
class ConfigValidationFailed:
    """Configuration values were rejected by Pydantic validation."""

    path: Path | None
    error: ValidationError
    kind: Literal["ConfigValidationFailed"] = "ConfigValidationFailed"


ConfigError = ConfigNotFound | ConfigParseFailed | ConfigValidationFailed


def describe_config_error(error: ConfigError) -> str:
    """Render a configuration error as a single human-readable line."""
    match error:
        case ConfigNotFound(path=path):
            return f"{path}: configuration file not found"
        case ConfigParseFailed(path=path, message=message):
            return f"{path}: invalid TOML ({message})"
        case ConfigValidationFailed(path=path, error=validation_error):
            location = str(path) if path is not None else "<inline config>"
            problems = "; ".join(
                f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
                for item in validation_error.errors()
            )
            return f"{location}: {problems}"
        case _ as unreachable:
            assert_never(unreachable)


__all__ = [
    "ConfigError",
    "ConfigNotFound",
    "ConfigParseFailed",
    "ConfigValidationFailed",
    "ParseFailed",
    "describe_config_error",
]
