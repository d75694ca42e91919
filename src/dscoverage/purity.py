# File: src/dscoverage/purity.py
"""Import-boundary purity analysis for UI candidate files.

For each file under a UI candidate directory:

1. direct boundary rules over every import edge
2. one-hop transitive check, only when no direct reason was found
3. data-fetching text check, independent of imports

Reasons are weighted and summed into a 0-100 score; any positive score makes
the file impure.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from dscoverage.aliases import AliasTable
from dscoverage.config import AnalysisConfig, PurityConfig
from dscoverage.reasons import REASON_WEIGHTS, DataFetching, ViolationReason
from dscoverage.result import Failure, Success
from dscoverage.rules import FileContents, direct_violations
from dscoverage.transitive import check_transitive


logger = logging.getLogger(__name__)

Purity = Literal["pure", "impure"]

MAX_SCORE = 100

DATA_FETCHING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bfetch\s*\("),
    re.compile(r"\baxios\."),
)


@dataclass(frozen=True)
class PurityReport:
    """Purity classification of one UI candidate file."""

    path: str
    purity: Purity
    score: int
    reasons: tuple[ViolationReason, ...]
    is_ui_candidate: Literal[True] = True


def reason_weight(reason: ViolationReason) -> int:
    """Score contribution of a single reason."""
    return REASON_WEIGHTS[reason.kind]


def score_reasons(path: str, reasons: tuple[ViolationReason, ...]) -> PurityReport:
    """Aggregate reasons into a clamped score and a pure/impure verdict."""
    score = min(MAX_SCORE, sum(reason_weight(reason) for reason in reasons))
    return PurityReport(
        path=path,
        purity="impure" if score > 0 else "pure",
        score=score,
        reasons=reasons,
    )


def has_data_fetching(content: str) -> bool:
    return any(pattern.search(content) for pattern in DATA_FETCHING_PATTERNS)


def is_ui_candidate(relative_path: str, config: PurityConfig) -> bool:
    return any(relative_path.startswith(directory) for directory in config.ui_candidate_dirs)


def analyze_file_purity(
    file_path: str,
    relative_path: str,
    contents: FileContents,
    alias_table: AliasTable,
    project_root: str,
    config: PurityConfig,
) -> PurityReport | None:
    """Analyse one file; None when the file is not a UI candidate.

    Args:
        file_path: Absolute path, a key of ``contents``
        relative_path: POSIX path relative to the project root
        contents: Absolute path -> source text for every loaded file
        alias_table: Path aliases of the project
        project_root: Absolute project root
        config: Purity matcher sets

    Returns:
        PurityReport, or None for non-candidates, unknown paths and empty files
    """
    if not is_ui_candidate(relative_path, config):
        return None

    content = contents.get(file_path)
    if not content:
        return None

    reasons: list[ViolationReason] = []

    match direct_violations(file_path, contents, alias_table, project_root, config):
        case Failure(error):
            logger.warning("Could not parse %s (%s); no import reasons recorded", relative_path, error.message)
        case Success(direct):
            reasons.extend(direct)

    if not reasons:
        visited: set[str] = set()
        reasons.extend(check_transitive(file_path, contents, alias_table, project_root, config, visited))

    if has_data_fetching(content):
        reasons.append(DataFetching())

    return score_reasons(relative_path, tuple(reasons))


def analyze_import_boundaries(
    contents: FileContents,
    project_root: Path,
    config: AnalysisConfig,
    alias_table: AliasTable,
) -> dict[str, PurityReport]:
    """Purity reports for every UI candidate in the loaded contents.

    Keys are POSIX paths relative to ``project_root``. Files outside the UI
    candidate directories have no entry.
    """
    if not config.purity.enabled:
        return {}

    root = str(project_root)
    reports: dict[str, PurityReport] = {}
    for file_path in contents:
        relative_path = Path(os.path.relpath(file_path, root)).as_posix()
        report = analyze_file_purity(file_path, relative_path, contents, alias_table, root, config.purity)
        if report is not None:
            reports[relative_path] = report

    impure = sum(1 for report in reports.values() if report.purity == "impure")
    logger.info("Purity analysis: %d UI candidates, %d impure", len(reports), impure)
    return reports


__all__ = [
    "DATA_FETCHING_PATTERNS",
    "MAX_SCORE",
    "Purity",
    "PurityReport",
    "analyze_file_purity",
    "analyze_import_boundaries",
    "has_data_fetching",
    "is_ui_candidate",
    "reason_weight",
    "score_reasons",
]
