# tests/helpers/factories.py
"""Config and content factories for dscoverage tests."""

from __future__ import annotations

import textwrap

from dscoverage.aliases import AliasEntry, AliasTable
from dscoverage.config import (
    AnalysisConfig,
    BusinessLogicAnalysisConfig,
    NativeHtmlElementsConfig,
    PurityConfig,
    RiskCeilings,
    RiskThresholds,
)
from tests.helpers.constants import (
    BUSINESS_DIR_MATCHERS,
    FORBIDDEN_IMPORT_MATCHERS,
    NEXT_SERVER_IMPORT_MATCHERS,
    PROJECT_ROOT,
)


def make_purity_config(
    *,
    enabled: bool = True,
    ui_candidate_dirs: tuple[str, ...] = ("components",),
    forbidden_import_matchers: tuple[str, ...] = FORBIDDEN_IMPORT_MATCHERS,
    next_server_import_matchers: tuple[str, ...] = NEXT_SERVER_IMPORT_MATCHERS,
    business_dir_matchers: tuple[str, ...] = BUSINESS_DIR_MATCHERS,
) -> PurityConfig:
    """PurityConfig with the matcher sets used across the suite."""
    return PurityConfig(
        enabled=enabled,
        ui_candidate_dirs=ui_candidate_dirs,
        forbidden_import_matchers=forbidden_import_matchers,
        next_server_import_matchers=next_server_import_matchers,
        business_dir_matchers=business_dir_matchers,
    )


def make_business_logic_config(
    *,
    enabled: bool = True,
    exclude_directories: tuple[str, ...] = ("node_modules",),
    elements: tuple[str, ...] = ("button", "input", "form", "a", "img"),
    native_enabled: bool = True,
    safe: RiskCeilings | None = None,
    careful: RiskCeilings | None = None,
) -> BusinessLogicAnalysisConfig:
    """BusinessLogicAnalysisConfig with default-compatible thresholds."""
    thresholds = RiskThresholds(
        safe=safe or RiskCeilings(max_api_calls=0, max_state_hooks=2, max_effects=1),
        careful=careful or RiskCeilings(max_api_calls=3, max_state_hooks=5, max_effects=3),
    )
    return BusinessLogicAnalysisConfig(
        enabled=enabled,
        exclude_directories=exclude_directories,
        native_html_elements=NativeHtmlElementsConfig(enabled=native_enabled, elements=elements),
        risk_thresholds=thresholds,
    )


def make_analysis_config(
    *,
    purity: PurityConfig | None = None,
    business_logic_analysis: BusinessLogicAnalysisConfig | None = None,
) -> AnalysisConfig:
    return AnalysisConfig(
        purity=purity or make_purity_config(),
        business_logic_analysis=business_logic_analysis or make_business_logic_config(),
    )


def make_alias_table() -> AliasTable:
    """The common Next.js ``"@/*": ["./*"]`` alias."""
    return (AliasEntry(pattern="@/*", replacement="./*", base_dir=None),)


def make_contents(files: dict[str, str], root: str = PROJECT_ROOT) -> dict[str, str]:
    """Build an absolute path -> source mapping from relative paths.

    Source snippets are dedented so tests can use indented triple-quoted strings.
    """
    return {f"{root}/{relative}": textwrap.dedent(source).lstrip("\n") for relative, source in files.items()}
