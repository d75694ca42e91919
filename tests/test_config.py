# File: tests/test_config.py
"""Tests for configuration models and loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dscoverage.config import (
    CONFIG_FILENAME,
    AnalysisConfig,
    PurityConfig,
    RiskCeilings,
    RiskThresholds,
    load_config,
    parse_config,
)
from dscoverage.errors import (
    ConfigNotFound,
    ConfigParseFailed,
    ConfigValidationFailed,
    describe_config_error,
)
from tests.helpers import expect_failure, expect_success


# ============================================================================
# DEFAULTS
# ============================================================================


class TestDefaults:
    def test_default_matcher_sets(self) -> None:
        config = AnalysisConfig()

        assert config.scan_dirs == (".",)
        assert config.purity.ui_candidate_dirs == ("components",)
        assert "@/lib/" in config.purity.forbidden_import_matchers
        assert "next/headers" in config.purity.next_server_import_matchers
        assert "lib/" in config.purity.business_dir_matchers

    def test_default_thresholds(self) -> None:
        thresholds = AnalysisConfig().business_logic_analysis.risk_thresholds

        assert thresholds.safe == RiskCeilings(max_api_calls=0, max_state_hooks=2, max_effects=1)
        assert thresholds.careful == RiskCeilings(max_api_calls=3, max_state_hooks=5, max_effects=3)

    def test_models_are_frozen(self) -> None:
        config = PurityConfig()

        with pytest.raises(ValidationError):
            config.enabled = False  # type: ignore[misc]


# ============================================================================
# VALIDATION
# ============================================================================


class TestParseConfig:
    def test_partial_override_keeps_defaults(self) -> None:
        careful = {"max_api_calls": 4, "max_state_hooks": 5, "max_effects": 3}

        config = expect_success(
            parse_config(
                {
                    "scan_dirs": ["src"],
                    "business_logic_analysis": {"risk_thresholds": {"careful": careful}},
                }
            )
        )

        assert config.scan_dirs == ("src",)
        assert config.business_logic_analysis.risk_thresholds.careful.max_api_calls == 4
        assert config.business_logic_analysis.risk_thresholds.safe.max_api_calls == 0
        assert config.purity == PurityConfig()

    def test_unknown_key_rejected(self) -> None:
        error = expect_failure(parse_config({"purity": {"allowed_import_matchers": ["react"]}}))

        assert isinstance(error, ConfigValidationFailed)
        assert error.path is None
        assert "purity.allowed_import_matchers" in describe_config_error(error)
        assert describe_config_error(error).startswith("<inline config>")

    def test_negative_ceiling_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RiskCeilings(max_api_calls=-1, max_state_hooks=0, max_effects=0)

    def test_careful_below_safe_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be lower"):
            RiskThresholds(
                safe=RiskCeilings(max_api_calls=2, max_state_hooks=2, max_effects=1),
                careful=RiskCeilings(max_api_calls=1, max_state_hooks=5, max_effects=3),
            )


# ============================================================================
# LOADING
# ============================================================================


class TestLoadConfig:
    def test_missing_implicit_file_uses_defaults(self, tmp_path: Path) -> None:
        assert expect_success(load_config(tmp_path)) == AnalysisConfig()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"

        error = expect_failure(load_config(tmp_path, path))

        assert error == ConfigNotFound(path=path)
        assert describe_config_error(error) == f"{path}: configuration file not found"

    def test_toml_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            """
            scan_dirs = ["src", "app"]

            [purity]
            ui_candidate_dirs = ["src/components"]
            next_server_import_matchers = ["next/headers"]

            [business_logic_analysis.native_html_elements]
            elements = ["button"]
            """,
            encoding="utf-8",
        )

        config = expect_success(load_config(tmp_path))

        assert config.scan_dirs == ("src", "app")
        assert config.purity.ui_candidate_dirs == ("src/components",)
        assert config.purity.next_server_import_matchers == ("next/headers",)
        assert config.business_logic_analysis.native_html_elements.elements == ("button",)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[purity\nenabled = true\n", encoding="utf-8")

        error = expect_failure(load_config(tmp_path))

        assert isinstance(error, ConfigParseFailed)
        assert error.path == path
        assert "invalid TOML" in describe_config_error(error)

    def test_invalid_values_report_file(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[purity]\nenabled = \"sometimes\"\n", encoding="utf-8")

        error = expect_failure(load_config(tmp_path))

        assert isinstance(error, ConfigValidationFailed)
        assert describe_config_error(error).startswith(f"{path}: purity.enabled")
