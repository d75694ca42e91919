# File: src/dscoverage/risk.py
"""Business-logic risk analysis.

Estimates how much care a design-system refactor of a file needs. Detection
is textual: regex patterns for API calls, React state hooks, uploads, auth and
forms, plus counts of native markup elements. The weighted signals place the
file in one of three tiers:

- ``safe``: presentational, swap UI elements directly
- ``careful``: some state or API usage, extract logic first
- ``page-level``: heavy logic, plan the refactor before touching it
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping

from dscoverage.config import AnalysisConfig, BusinessLogicAnalysisConfig, RiskThresholds


logger = logging.getLogger(__name__)

RiskLevel = Literal["safe", "careful", "page-level"]

MAX_SCORE = 100
LARGE_FILE_LINES = 300

API_CALL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bfetch\s*\("),
    re.compile(r"\bsupabase\."),
    re.compile(r"\baxios\."),
    re.compile(r"\bapi\."),
    re.compile(r"\.get\(|\.post\(|\.put\(|\.delete\("),
)
USE_STATE_PATTERN = re.compile(r"\buseState\s*\(")
USE_EFFECT_PATTERN = re.compile(r"\buseEffect\s*\(")
FILE_UPLOAD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bFileReader\b"),
    re.compile(r"\bFormData\b"),
    re.compile(r"type=[\"']file[\"']"),
    re.compile(r"\.upload\s*\("),
)
AUTH_FLOW_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bsignIn\s*\("),
    re.compile(r"\bsignUp\s*\("),
    re.compile(r"\bsignOut\s*\("),
    re.compile(r"\bgetUser\s*\("),
    re.compile(r"\bgetSession\s*\("),
    re.compile(r"\bauth\."),
)
FORM_HANDLING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bonSubmit\s*="),
    re.compile(r"\bhandleSubmit\s*\("),
    re.compile(r"\bvalidate\s*\("),
    re.compile(r"<form"),
)

SUGGESTED_ACTIONS: dict[RiskLevel, tuple[str, ...]] = {
    "safe": ("Direct UI swap — replace native elements with design system components",),
    "careful": (
        "Extract business logic to custom hook/service first",
        "Then replace UI elements incrementally",
        "Test thoroughly after each step",
    ),
    "page-level": (
        "Extract business logic to hooks (one hook per feature)",
        "Replace form elements incrementally (one section at a time)",
        "Test after each section",
        "Consider splitting into sub-components",
        "Propose plan first, never auto-apply",
    ),
}

RATIONALES: dict[RiskLevel, str] = {
    "safe": "Pure presentational component with minimal logic",
    "careful": "Contains API calls or state management that needs careful extraction",
    "page-level": "Complex flows with multiple APIs, critical business logic, or high complexity",
}


# --------------------------------------------------------------------------- #
# Report types                                                                #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class NativeElementCounts:
    """Occurrences of each configured native element, plus their total."""

    counts: Mapping[str, int]
    total: int


@dataclass(frozen=True)
class BusinessSignals:
    api_calls: int
    use_state_count: int
    use_effect_count: int
    file_uploads: bool
    auth_flows: bool
    form_handling: bool


@dataclass(frozen=True)
class Complexity:
    risk_level: RiskLevel
    score: int
    signals: tuple[str, ...]


@dataclass(frozen=True)
class SuggestedRefactor:
    category: RiskLevel
    rationale: str
    suggested_actions: tuple[str, ...]


@dataclass(frozen=True)
class RiskReport:
    """Refactor-risk classification of one file."""

    path: str
    native_html_elements: NativeElementCounts
    business_logic_signals: BusinessSignals
    complexity: Complexity
    suggested_refactor: SuggestedRefactor


# --------------------------------------------------------------------------- #
# Detection                                                                   #
# --------------------------------------------------------------------------- #


def count_native_elements(content: str, elements: tuple[str, ...]) -> NativeElementCounts:
    """Count ``<element`` openings followed by whitespace, ``/``, ``>`` or end of text."""
    counts = {
        element: len(re.findall(rf"<{re.escape(element)}(?:[\s/>]|\Z)", content))
        for element in elements
    }
    return NativeElementCounts(counts=counts, total=sum(counts.values()))


def detect_business_signals(content: str) -> BusinessSignals:
    return BusinessSignals(
        api_calls=sum(len(pattern.findall(content)) for pattern in API_CALL_PATTERNS),
        use_state_count=len(USE_STATE_PATTERN.findall(content)),
        use_effect_count=len(USE_EFFECT_PATTERN.findall(content)),
        file_uploads=any(pattern.search(content) for pattern in FILE_UPLOAD_PATTERNS),
        auth_flows=any(pattern.search(content) for pattern in AUTH_FLOW_PATTERNS),
        form_handling=any(pattern.search(content) for pattern in FORM_HANDLING_PATTERNS),
    )


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


def assess_risk(
    signals: BusinessSignals,
    native_element_total: int,
    line_count: int,
    thresholds: RiskThresholds,
) -> Complexity:
    """Score the signals and pick a risk tier (page-level checked first)."""
    detected: list[str] = []
    score = 0

    if signals.api_calls > 0:
        detected.append(_plural(signals.api_calls, "API call"))
        score += signals.api_calls * 15
    if signals.use_state_count > 0:
        detected.append(_plural(signals.use_state_count, "useState hook"))
        score += signals.use_state_count * 5
    if signals.use_effect_count > 0:
        detected.append(_plural(signals.use_effect_count, "useEffect hook"))
        score += signals.use_effect_count * 10
    if signals.file_uploads:
        detected.append("File uploads")
        score += 25
    if signals.auth_flows:
        detected.append("Auth flows")
        score += 30
    if signals.form_handling:
        detected.append("Form handling")
        score += 10
    if native_element_total > 0:
        detected.append(_plural(native_element_total, "native HTML element"))
        score += native_element_total * 2
    if line_count > LARGE_FILE_LINES:
        detected.append(f"Large file ({line_count} lines)")
        score += 10

    careful, safe = thresholds.careful, thresholds.safe
    risk_level: RiskLevel
    if (
        signals.api_calls > careful.max_api_calls
        or signals.use_state_count > careful.max_state_hooks
        or signals.use_effect_count > careful.max_effects
        or signals.file_uploads
        or signals.auth_flows
        or score >= 50
    ):
        risk_level = "page-level"
    elif (
        signals.api_calls > safe.max_api_calls
        or signals.use_state_count > safe.max_state_hooks
        or signals.use_effect_count > safe.max_effects
        or native_element_total > 0
        or score >= 20
    ):
        risk_level = "careful"
    else:
        risk_level = "safe"

    return Complexity(risk_level=risk_level, score=min(MAX_SCORE, score), signals=tuple(detected))


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def is_excluded(relative_path: str, config: BusinessLogicAnalysisConfig) -> bool:
    return any(relative_path.startswith(directory) for directory in config.exclude_directories)


def analyze_risk(content: str, relative_path: str, config: BusinessLogicAnalysisConfig) -> RiskReport | None:
    """Risk report for one file, or None if it sits in an excluded directory."""
    if is_excluded(relative_path, config):
        return None

    native = (
        count_native_elements(content, config.native_html_elements.elements)
        if config.native_html_elements.enabled
        else NativeElementCounts(counts={}, total=0)
    )
    signals = detect_business_signals(content)
    complexity = assess_risk(signals, native.total, len(content.split("\n")), config.risk_thresholds)

    return RiskReport(
        path=relative_path,
        native_html_elements=native,
        business_logic_signals=signals,
        complexity=complexity,
        suggested_refactor=SuggestedRefactor(
            category=complexity.risk_level,
            rationale=RATIONALES[complexity.risk_level],
            suggested_actions=SUGGESTED_ACTIONS[complexity.risk_level],
        ),
    )


def analyze_business_logic(
    contents: Mapping[str, str],
    scan_root: Path,
    config: AnalysisConfig,
) -> dict[str, RiskReport]:
    """Risk reports keyed by POSIX path relative to ``scan_root``."""
    settings = config.business_logic_analysis
    if not settings.enabled:
        return {}

    reports: dict[str, RiskReport] = {}
    for file_path, content in contents.items():
        relative_path = Path(os.path.relpath(file_path, scan_root)).as_posix()
        report = analyze_risk(content, relative_path, settings)
        if report is not None:
            reports[relative_path] = report

    logger.info("Risk analysis: %d files classified", len(reports))
    return reports


__all__ = [
    "BusinessSignals",
    "Complexity",
    "LARGE_FILE_LINES",
    "NativeElementCounts",
    "RATIONALES",
    "RiskLevel",
    "RiskReport",
    "SUGGESTED_ACTIONS",
    "SuggestedRefactor",
    "analyze_business_logic",
    "analyze_risk",
    "assess_risk",
    "count_native_elements",
    "detect_business_signals",
    "is_excluded",
]
