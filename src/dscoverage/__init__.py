# File: src/dscoverage/__init__.py
"""dscoverage: UI purity and refactor-risk analysis for frontend codebases.

Two analyses run over a pre-loaded mapping of absolute path -> source text:

- import-boundary purity: flags UI candidate files that import business
  logic directly or through a local helper (one hop)
- business-logic risk: classifies files as safe / careful / page-level
  refactor targets from textual signals
"""

from __future__ import annotations

from dscoverage.aliases import AliasEntry, AliasTable, load_alias_table, resolve_specifier
from dscoverage.config import AnalysisConfig, load_config
from dscoverage.purity import PurityReport, analyze_import_boundaries
from dscoverage.risk import RiskReport, analyze_business_logic

__all__ = [
    "AliasEntry",
    "AliasTable",
    "AnalysisConfig",
    "PurityReport",
    "RiskReport",
    "analyze_business_logic",
    "analyze_import_boundaries",
    "load_alias_table",
    "load_config",
    "resolve_specifier",
]
