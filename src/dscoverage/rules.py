# File: src/dscoverage/rules.py
"""Boundary rules applied to individual import edges.

Each edge yields at most one reason. Rules are evaluated in a fixed order and
the first match wins:

1. forbidden specifier matchers    -> ``forbidden-import``
2. server-only API matchers        -> ``server-api``
3. resolved path in business dir   -> ``forbidden-import`` (business logic zone)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Mapping

from dscoverage.aliases import AliasTable, resolve_specifier
from dscoverage.config import PurityConfig
from dscoverage.errors import ParseFailed
from dscoverage.imports import FileKind, ImportEdge, extract_imports
from dscoverage.reasons import DirectReason, ForbiddenImport, ServerApiImport
from dscoverage.result import Failure, Result, Success


FileContents = Mapping[str, str]


@dataclass(frozen=True)
class ResolverContext:
    """Inputs needed to resolve specifiers written in one file."""

    alias_table: AliasTable
    project_root: str
    current_dir: str

    def resolve(self, specifier: str) -> str | None:
        return resolve_specifier(specifier, self.alias_table, self.project_root, self.current_dir)


def matches_any(specifier: str, matchers: Iterable[str]) -> bool:
    """Check a specifier against prefix / exact matchers.

    A matcher ending in ``/`` matches by prefix. Any other matcher matches the
    exact specifier or the specifier followed by ``/``.
    """
    return any(
        specifier.startswith(matcher)
        if matcher.endswith("/")
        else specifier == matcher or specifier.startswith(matcher + "/")
        for matcher in matchers
    )


def in_business_dir(resolved_path: str | None, business_dir_matchers: Iterable[str]) -> bool:
    """Check whether a resolved path falls inside a business-logic location."""
    if not resolved_path:
        return False
    normalized = resolved_path.replace("\\", "/")
    return any(matcher in normalized for matcher in business_dir_matchers)


def classify_edge(edge: ImportEdge, context: ResolverContext, config: PurityConfig) -> DirectReason | None:
    """Classify one import edge against the configured matcher sets."""
    specifier = edge.specifier

    if matches_any(specifier, config.forbidden_import_matchers):
        return ForbiddenImport(
            import_path=specifier,
            resolved_path=context.resolve(specifier),
            line=edge.line,
            message=f'Forbidden import: "{specifier}"',
        )

    if matches_any(specifier, config.next_server_import_matchers):
        return ServerApiImport(
            import_path=specifier,
            line=edge.line,
            message=f'Next.js server API: "{specifier}"',
        )

    resolved = context.resolve(specifier)
    if in_business_dir(resolved, config.business_dir_matchers):
        return ForbiddenImport(
            import_path=specifier,
            resolved_path=resolved,
            line=edge.line,
            message=f'Business logic zone import: "{specifier}"',
        )

    return None


def direct_violations(
    file_path: str,
    contents: FileContents,
    alias_table: AliasTable,
    project_root: str,
    config: PurityConfig,
) -> Result[tuple[DirectReason, ...], ParseFailed]:
    """Apply the boundary rules to every import edge of one file.

    Args:
        file_path: Absolute path of the file, a key of ``contents``
        contents: Absolute path -> source text for every loaded file
        alias_table: Path aliases of the project
        project_root: Absolute project root
        config: Matcher sets

    Returns:
        Success(reasons in edge order); an unknown path yields no reasons.
        Failure(ParseFailed) if the file cannot be parsed.
    """
    content = contents.get(file_path)
    if content is None:
        return Success(())

    context = ResolverContext(
        alias_table=alias_table,
        project_root=project_root,
        current_dir=os.path.dirname(file_path),
    )

    match extract_imports(content, FileKind.from_path(file_path)):
        case Failure(error):
            return Failure(error)
        case Success(edges):
            classified = (classify_edge(edge, context, config) for edge in edges)
            return Success(tuple(reason for reason in classified if reason is not None))


__all__ = [
    "FileContents",
    "ResolverContext",
    "classify_edge",
    "direct_violations",
    "in_business_dir",
    "matches_any",
]
