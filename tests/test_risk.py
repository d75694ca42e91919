# File: tests/test_risk.py
"""Tests for the business-logic risk analysis."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from dscoverage.config import RiskCeilings
from dscoverage.risk import (
    RATIONALES,
    SUGGESTED_ACTIONS,
    RiskReport,
    analyze_business_logic,
    analyze_risk,
    count_native_elements,
    detect_business_signals,
)
from tests.helpers import PROJECT_ROOT, make_analysis_config, make_business_logic_config, make_contents


def risk_of(source: str, **config_overrides: Any) -> RiskReport:
    report = analyze_risk(textwrap.dedent(source), "components/File.tsx", make_business_logic_config(**config_overrides))
    assert report is not None
    return report


# ============================================================================
# RISK TIERS
# ============================================================================


class TestRiskTiers:
    def test_presentational_file_is_safe(self) -> None:
        report = risk_of("export const Title = ({ text }) => <h1>{text}</h1>;\n")

        assert report.complexity.risk_level == "safe"
        assert report.complexity.score == 0
        assert report.complexity.signals == ()
        assert report.suggested_refactor.rationale == RATIONALES["safe"]
        assert report.suggested_refactor.suggested_actions == SUGGESTED_ACTIONS["safe"]

    def test_four_api_calls_is_page_level(self) -> None:
        report = risk_of(
            """
            export async function sync() {
              await fetch("/a");
              await fetch("/b");
              await fetch("/c");
              await fetch("/d");
            }
            """
        )

        assert report.business_logic_signals.api_calls == 4
        assert report.complexity.score == 60
        assert report.complexity.risk_level == "page-level"
        assert report.complexity.signals == ("4 API calls",)

    def test_single_native_element_is_careful(self) -> None:
        report = risk_of("export const Save = () => <button>Save</button>;\n")

        assert report.native_html_elements.total == 1
        assert report.complexity.score == 2
        assert report.complexity.risk_level == "careful"
        assert report.suggested_refactor.category == "careful"

    def test_state_hooks_above_safe_ceiling_is_careful(self) -> None:
        report = risk_of(
            """
            const [a, setA] = useState(0);
            const [b, setB] = useState(0);
            const [c, setC] = useState(0);
            """
        )

        assert report.complexity.risk_level == "careful"
        assert report.complexity.score == 15
        assert report.complexity.signals == ("3 useState hooks",)

    def test_auth_flow_is_page_level(self) -> None:
        report = risk_of("export const login = () => signIn({ provider: 'github' });\n")

        assert report.business_logic_signals.auth_flows
        assert report.complexity.risk_level == "page-level"
        assert report.complexity.score == 30

    def test_file_upload_is_page_level(self) -> None:
        report = risk_of('export const Picker = () => <input type="file" />;\n', elements=())

        assert report.complexity.signals == ("File uploads",)
        assert report.complexity.risk_level == "page-level"

    def test_score_clamped_at_100(self) -> None:
        calls = "\n".join(f'fetch("/{i}");' for i in range(10))

        report = risk_of(calls)

        assert report.business_logic_signals.api_calls == 10
        assert report.complexity.score == 100

    def test_custom_thresholds(self) -> None:
        source = 'export const load = () => fetch("/api");\n'

        default = risk_of(source)
        relaxed = risk_of(source, safe=RiskCeilings(max_api_calls=1, max_state_hooks=2, max_effects=1))

        assert default.complexity.risk_level == "careful"
        assert relaxed.complexity.risk_level == "safe"


# ============================================================================
# SIGNAL DETECTION
# ============================================================================


class TestSignals:
    def test_detected_signal_descriptions(self) -> None:
        report = risk_of(
            """
            export function Form() {
              const [v, setV] = useState("");
              useEffect(() => {}, []);
              const data = new FormData();
              return <form onSubmit={save}><input /></form>;
            }
            """
        )

        assert report.complexity.signals == (
            "1 useState hook",
            "1 useEffect hook",
            "File uploads",
            "Form handling",
            "2 native HTML elements",
        )

    def test_large_file(self) -> None:
        report = risk_of("\n".join(["// filler"] * 301))

        assert report.complexity.signals == ("Large file (301 lines)",)
        assert report.complexity.score == 10
        assert report.complexity.risk_level == "safe"

    def test_business_signals(self) -> None:
        signals = detect_business_signals(
            'const s = await getSession();\nconst r = await supabase.from("t").select();\n'
        )

        assert signals.auth_flows
        assert signals.api_calls == 1
        assert not signals.form_handling
        assert not signals.file_uploads


# ============================================================================
# NATIVE ELEMENTS
# ============================================================================


class TestNativeElements:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ('<a href="/x">x</a>', 1),
            ("<abbr>HTML</abbr>", 0),
            ("<a>", 1),
            ("<a/>", 1),
            ("<a\n  href='/x'>", 1),
            ("return <a", 1),
            ("<A href='/x' />", 0),
        ],
    )
    def test_anchor_boundaries(self, source: str, expected: int) -> None:
        assert count_native_elements(source, ("a",)).counts["a"] == expected

    def test_counts_per_element_and_total(self) -> None:
        counts = count_native_elements("<button /><button>ok</button><img src='x' /><Button />", ("button", "img"))

        assert dict(counts.counts) == {"button": 2, "img": 1}
        assert counts.total == 3

    def test_disabled_native_counting(self) -> None:
        report = risk_of("export const Save = () => <button>Save</button>;\n", native_enabled=False)

        assert report.native_html_elements.total == 0
        assert dict(report.native_html_elements.counts) == {}
        assert report.complexity.risk_level == "safe"


# ============================================================================
# PROJECT-LEVEL ANALYSIS
# ============================================================================


class TestAnalyzeBusinessLogic:
    def test_reports_keyed_by_relative_path(self) -> None:
        contents = make_contents(
            {
                "components/Title.tsx": "export const Title = () => <h1>Hi</h1>;\n",
                "app/page.tsx": 'export default async function Page() { await fetch("/x"); }\n',
                "node_modules/pkg/index.js": "module.exports = fetch('/x');\n",
            }
        )

        reports = analyze_business_logic(contents, Path(PROJECT_ROOT), make_analysis_config())

        assert sorted(reports) == ["app/page.tsx", "components/Title.tsx"]
        assert reports["app/page.tsx"].path == "app/page.tsx"
        assert reports["app/page.tsx"].complexity.risk_level == "careful"

    def test_excluded_directory(self) -> None:
        config = make_business_logic_config(exclude_directories=("legacy",))

        assert analyze_risk("<button />", "legacy/Old.tsx", config) is None

    def test_disabled_analysis(self) -> None:
        config = make_analysis_config(business_logic_analysis=make_business_logic_config(enabled=False))
        contents = make_contents({"components/Title.tsx": "<button />"})

        assert analyze_business_logic(contents, Path(PROJECT_ROOT), config) == {}
