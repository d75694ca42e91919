# File: src/dscoverage/serialization.py
"""JSON wire shape for purity and risk reports.

Reports are emitted with camelCase keys so the dashboard layer can consume
them unchanged. Optional reason fields are omitted when absent.
"""

from __future__ import annotations

import json
from typing import Mapping, TypeAlias

from dscoverage.purity import PurityReport
from dscoverage.reasons import ViolationReason
from dscoverage.risk import RiskReport


JsonValue: TypeAlias = str | int | bool | None | list["JsonValue"] | dict[str, "JsonValue"]


def reason_to_json(reason: ViolationReason) -> dict[str, JsonValue]:
    data: dict[str, JsonValue] = {
        "type": reason.kind,
        "importPath": reason.import_path,
        "message": reason.message,
    }
    if reason.resolved_path is not None:
        data["resolvedPath"] = reason.resolved_path
    if reason.line is not None:
        data["line"] = reason.line
    return data


def purity_report_to_json(report: PurityReport) -> dict[str, JsonValue]:
    return {
        "path": report.path,
        "isUiCandidate": report.is_ui_candidate,
        "purity": report.purity,
        "score": report.score,
        "reasons": [reason_to_json(reason) for reason in report.reasons],
    }


def risk_report_to_json(report: RiskReport) -> dict[str, JsonValue]:
    native: dict[str, JsonValue] = dict(report.native_html_elements.counts)
    native["total"] = report.native_html_elements.total
    signals = report.business_logic_signals
    return {
        "path": report.path,
        "nativeHtmlElements": native,
        "businessLogicSignals": {
            "apiCalls": signals.api_calls,
            "useStateCount": signals.use_state_count,
            "useEffectCount": signals.use_effect_count,
            "fileUploads": signals.file_uploads,
            "authFlows": signals.auth_flows,
            "formHandling": signals.form_handling,
        },
        "complexity": {
            "riskLevel": report.complexity.risk_level,
            "score": report.complexity.score,
            "signals": list(report.complexity.signals),
        },
        "suggestedRefactor": {
            "category": report.suggested_refactor.category,
            "rationale": report.suggested_refactor.rationale,
            "suggestedActions": list(report.suggested_refactor.suggested_actions),
        },
    }


def purity_reports_to_json(reports: Mapping[str, PurityReport]) -> str:
    """Serialize a purity report mapping; keys are sorted for stable output."""
    payload = {path: purity_report_to_json(report) for path, report in reports.items()}
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


def risk_reports_to_json(reports: Mapping[str, RiskReport]) -> str:
    """Serialize a risk report mapping; keys are sorted for stable output."""
    payload = {path: risk_report_to_json(report) for path, report in reports.items()}
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


__all__ = [
    "purity_report_to_json",
    "purity_reports_to_json",
    "reason_to_json",
    "risk_report_to_json",
    "risk_reports_to_json",
]
