# File: src/dscoverage/config.py
"""Configuration models and loading for dscoverage.

The analysis configuration lives in an optional ``dscoverage.toml`` at the
root of the scanned frontend project. Every table is optional; missing keys
fall back to the defaults declared on the models below.

Example::

    scan_dirs = ["src"]

    [purity]
    ui_candidate_dirs = ["src/components"]
    forbidden_import_matchers = ["@/lib/", "@/db/"]

    [business_logic_analysis.risk_thresholds.careful]
    max_api_calls = 4
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Annotated, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from dscoverage.errors import (
    ConfigError,
    ConfigNotFound,
    ConfigParseFailed,
    ConfigValidationFailed,
)
from dscoverage.result import Failure, Result, Success


CONFIG_FILENAME = "dscoverage.toml"

TModel = TypeVar("TModel", bound=BaseModel)

NonNegativeInt = Annotated[int, Field(ge=0)]


# --------------------------------------------------------------------------- #
# Purity (import boundary) configuration                                      #
# --------------------------------------------------------------------------- #


class PurityConfig(BaseModel):
    """Matcher sets driving the import-boundary purity analysis.

    Attributes
    ----------
    enabled
        When false the purity analysis returns an empty mapping.
    ui_candidate_dirs
        Project-relative prefixes of files eligible for purity analysis.
    forbidden_import_matchers
        Specifier matchers that always mark an import as forbidden.
    next_server_import_matchers
        Specifier matchers for server-only framework APIs.
    business_dir_matchers
        Substrings of resolved paths marking business-logic locations.

    Notes
    -----
    A matcher ending in ``/`` matches by prefix; any other matcher matches the
    exact specifier or the specifier followed by ``/``.
    """

    enabled: bool = True
    ui_candidate_dirs: tuple[str, ...] = ("components",)
    forbidden_import_matchers: tuple[str, ...] = (
        "@/lib/",
        "@/server/",
        "@/db/",
        "@/actions/",
        "@/features/",
    )
    next_server_import_matchers: tuple[str, ...] = (
        "next/headers",
        "next/cache",
        "next/server",
        "server-only",
    )
    business_dir_matchers: tuple[str, ...] = (
        "lib/",
        "server/",
        "db/",
        "actions/",
        "features/",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


# --------------------------------------------------------------------------- #
# Business-logic risk configuration                                           #
# --------------------------------------------------------------------------- #


class RiskCeilings(BaseModel):
    """Upper bounds a file may reach and still stay within one risk tier."""

    max_api_calls: NonNegativeInt
    max_state_hooks: NonNegativeInt
    max_effects: NonNegativeInt

    model_config = ConfigDict(frozen=True, extra="forbid")


class RiskThresholds(BaseModel):
    """Ceilings for the ``safe`` and ``careful`` tiers."""

    safe: RiskCeilings = RiskCeilings(max_api_calls=0, max_state_hooks=2, max_effects=1)
    careful: RiskCeilings = RiskCeilings(max_api_calls=3, max_state_hooks=5, max_effects=3)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _validate(self) -> RiskThresholds:
        """Ensure every careful ceiling is at least its safe counterpart."""
        if (
            self.careful.max_api_calls < self.safe.max_api_calls
            or self.careful.max_state_hooks < self.safe.max_state_hooks
            or self.careful.max_effects < self.safe.max_effects
        ):
            raise ValueError("`careful` ceilings must not be lower than `safe` ceilings.")
        return self


class NativeHtmlElementsConfig(BaseModel):
    """Native markup elements counted as candidates for design-system swaps."""

    enabled: bool = True
    elements: tuple[str, ...] = (
        "button",
        "input",
        "select",
        "textarea",
        "form",
        "a",
        "img",
        "table",
        "dialog",
        "label",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


class BusinessLogicAnalysisConfig(BaseModel):
    """Settings for the business-logic risk analyzer."""

    enabled: bool = True
    exclude_directories: tuple[str, ...] = ("node_modules", ".next", "dist", "build")
    native_html_elements: NativeHtmlElementsConfig = NativeHtmlElementsConfig()
    risk_thresholds: RiskThresholds = RiskThresholds()

    model_config = ConfigDict(frozen=True, extra="forbid")


class AnalysisConfig(BaseModel):
    """Top-level dscoverage configuration."""

    scan_dirs: tuple[str, ...] = (".",)
    purity: PurityConfig = PurityConfig()
    business_logic_analysis: BusinessLogicAnalysisConfig = BusinessLogicAnalysisConfig()

    model_config = ConfigDict(frozen=True, extra="forbid")


# --------------------------------------------------------------------------- #
# Loading                                                                     #
# --------------------------------------------------------------------------- #


def validate_model(model_cls: type[TModel], data: Mapping[str, object]) -> Result[TModel, ValidationError]:
    """Construct a Pydantic model and surface validation issues as a Result."""
    try:
        return Success(model_cls.model_validate(data))
    except ValidationError as exc:
        return Failure(exc)


def parse_config(data: Mapping[str, object], source: Path | None = None) -> Result[AnalysisConfig, ConfigError]:
    """Validate already-parsed configuration data.

    Args:
        data: Mapping with the same shape as ``dscoverage.toml``
        source: File the data came from, for error reporting

    Returns:
        Success(AnalysisConfig) or Failure(ConfigValidationFailed)
    """
    match validate_model(AnalysisConfig, data):
        case Success(config):
            return Success(config)
        case Failure(error):
            return Failure(ConfigValidationFailed(path=source, error=error))


def load_config(project_root: Path, config_path: Path | None = None) -> Result[AnalysisConfig, ConfigError]:
    """Load configuration for a scanned project.

    Args:
        project_root: Root of the frontend project being analysed
        config_path: Explicit configuration file; defaults to
            ``<project_root>/dscoverage.toml``

    Returns:
        Success(AnalysisConfig) with defaults when no implicit config file
        exists, or a Failure describing why the file could not be used.
    """
    path = config_path if config_path is not None else project_root / CONFIG_FILENAME

    if not path.is_file():
        if config_path is not None:
            return Failure(ConfigNotFound(path=path))
        return Success(AnalysisConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        return Failure(ConfigParseFailed(path=path, message=str(exc)))

    return parse_config(data, source=path)


__all__ = [
    "CONFIG_FILENAME",
    "AnalysisConfig",
    "BusinessLogicAnalysisConfig",
    "NativeHtmlElementsConfig",
    "PurityConfig",
    "RiskCeilings",
    "RiskThresholds",
    "load_config",
    "parse_config",
    "validate_model",
]
