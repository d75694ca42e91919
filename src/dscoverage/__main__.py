# File: src/dscoverage/__main__.py
"""Command-line interface for dscoverage.

Usage:
    dscoverage purity [ROOT] [--config PATH] [--json] [--verbose]
    dscoverage risk [ROOT] [--config PATH] [--json] [--verbose]
    dscoverage explain KIND

Examples:
    dscoverage purity                      # Purity of UI candidates under cwd
    dscoverage purity web/ --json          # JSON report for the dashboard
    dscoverage risk web/ --verbose         # Risk tiers with detected signals
    dscoverage explain transitive          # Show what a reason kind means
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dscoverage.aliases import load_alias_table
from dscoverage.config import AnalysisConfig, load_config
from dscoverage.discovery import collect_source_files, load_contents
from dscoverage.errors import describe_config_error
from dscoverage.messages import explain_reason, format_reason
from dscoverage.purity import analyze_import_boundaries
from dscoverage.result import Failure, Success
from dscoverage.risk import analyze_business_logic
from dscoverage.serialization import purity_reports_to_json, risk_reports_to_json


logger = logging.getLogger("dscoverage")

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dscoverage",
        description="Audit a frontend codebase for UI purity and refactor risk",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0 - No impure UI files (or informational command)
  1 - Impure UI files found (purity)
  2 - Configuration error
        """,
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("purity", "Check UI candidate files for business-logic imports"),
        ("risk", "Classify files by business-logic refactor risk"),
    ):
        sub = subcommands.add_parser(name, help=help_text)
        sub.add_argument("root", nargs="?", type=Path, default=Path("."), help="Project root (default: .)")
        sub.add_argument("--config", type=Path, help="Configuration file (default: ROOT/dscoverage.toml)")
        sub.add_argument("--json", action="store_true", help="Print the JSON report instead of text")
        sub.add_argument("--verbose", "-v", action="store_true", help="Debug logging and detailed messages")

    explain = subcommands.add_parser("explain", help="Explain a purity reason kind")
    explain.add_argument("kind", help="forbidden-import, server-api, transitive or data-fetching")

    return parser


def _load(root: Path, config_path: Path | None) -> AnalysisConfig | None:
    match load_config(root, config_path):
        case Failure(error):
            print(f"ERROR: {describe_config_error(error)}", file=sys.stderr)
            return None
        case Success(config):
            return config


def _run_purity(root: Path, config: AnalysisConfig, as_json: bool, verbose: bool) -> int:
    contents = load_contents(collect_source_files(root, config.scan_dirs))
    alias_table = load_alias_table(root)
    reports = analyze_import_boundaries(contents, root, config, alias_table)

    if as_json:
        print(purity_reports_to_json(reports))
    else:
        for path in sorted(reports):
            report = reports[path]
            if report.purity == "pure":
                if verbose:
                    print(f"✅ {path}")
                continue
            print(f"❌ {path} (score {report.score})")
            for reason in report.reasons:
                print("   " + format_reason(path, reason, verbose=verbose).replace("\n", "\n   "))

        impure = sum(1 for report in reports.values() if report.purity == "impure")
        print()
        print(f"Checked {len(reports)} UI candidate files, {impure} impure")

    return EXIT_VIOLATIONS if any(r.purity == "impure" for r in reports.values()) else EXIT_OK


def _run_risk(root: Path, config: AnalysisConfig, as_json: bool, verbose: bool) -> int:
    contents = load_contents(collect_source_files(root, config.scan_dirs))
    reports = analyze_business_logic(contents, root, config)

    if as_json:
        print(risk_reports_to_json(reports))
        return EXIT_OK

    tiers: dict[str, list[str]] = {"safe": [], "careful": [], "page-level": []}
    for path in sorted(reports):
        tiers[reports[path].complexity.risk_level].append(path)

    for tier, paths in tiers.items():
        print(f"{tier}: {len(paths)} files")
        if not verbose:
            continue
        for path in paths:
            complexity = reports[path].complexity
            signals = ", ".join(complexity.signals) or "no signals"
            print(f"   {path} (score {complexity.score}): {signals}")

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the dscoverage CLI.

    Returns:
        Exit code (0 = clean, 1 = impure files, 2 = configuration error)
    """
    args = _build_parser().parse_args(argv)

    if args.command == "explain":
        print(explain_reason(args.kind))
        return EXIT_OK

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = args.root.resolve()
    if not root.is_dir():
        print(f"ERROR: project root not found: {root}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    config = _load(root, args.config)
    if config is None:
        return EXIT_CONFIG_ERROR

    if args.command == "purity":
        return _run_purity(root, config, args.json, args.verbose)
    return _run_risk(root, config, args.json, args.verbose)


if __name__ == "__main__":
    sys.exit(main())
