# File: src/dscoverage/transitive.py
"""One-hop transitive boundary check.

A UI file with clean imports can still be coupled to business logic through
a local helper. For each relative import of the file the helper is located in
the loaded contents and checked with the direct boundary rules. The helper's
own relative imports are not followed: attribution stops after one hop.
"""

from __future__ import annotations

import logging
import os
from collections import deque

from dscoverage.aliases import AliasTable, resolve_specifier
from dscoverage.config import PurityConfig
from dscoverage.imports import FileKind, ImportEdge, extract_imports
from dscoverage.reasons import TransitiveImport
from dscoverage.result import Failure, Success
from dscoverage.rules import FileContents, direct_violations


logger = logging.getLogger(__name__)

CANDIDATE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")

# ESM-style TypeScript imports name the emitted file: "./helper.js" -> helper.ts
_EMITTED_TO_SOURCE: dict[str, tuple[str, ...]] = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def candidate_paths(resolved: str) -> tuple[str, ...]:
    """Paths tried for a resolved specifier, in priority order."""
    stem, suffix = os.path.splitext(resolved)
    with_extensions = tuple(resolved + ext for ext in CANDIDATE_EXTENSIONS if not resolved.endswith(ext))
    source_equivalents = tuple(stem + ext for ext in _EMITTED_TO_SOURCE.get(suffix, ()))
    return (resolved, *with_extensions, *source_equivalents)


def locate_target(resolved: str, contents: FileContents) -> str | None:
    """Return the first candidate path present in the loaded contents."""
    return next((candidate for candidate in candidate_paths(resolved) if candidate in contents), None)


def _relative_edges(file_path: str, contents: FileContents) -> tuple[ImportEdge, ...]:
    content = contents.get(file_path)
    if content is None:
        return ()
    match extract_imports(content, FileKind.from_path(file_path)):
        case Success(edges):
            return tuple(edge for edge in edges if edge.specifier.startswith("."))
        case Failure(error):
            logger.debug("Transitive check skipped for %s: %s", file_path, error.message)
            return ()


def check_transitive(
    file_path: str,
    contents: FileContents,
    alias_table: AliasTable,
    project_root: str,
    config: PurityConfig,
    visited: set[str],
) -> tuple[TransitiveImport, ...]:
    """Report relative imports of ``file_path`` that lead to impure files.

    Args:
        file_path: Absolute path of the file under analysis
        contents: Absolute path -> source text for every loaded file
        alias_table: Path aliases of the project
        project_root: Absolute project root
        config: Matcher sets
        visited: Absolute paths already processed in this traversal;
            updated in place

    Returns:
        One TransitiveImport per impure target, in edge order
    """
    if file_path in visited:
        return ()
    visited.add(file_path)

    current_dir = os.path.dirname(file_path)
    worklist = deque(_relative_edges(file_path, contents))
    reasons: list[TransitiveImport] = []

    while worklist:
        edge = worklist.popleft()
        resolved = resolve_specifier(edge.specifier, alias_table, project_root, current_dir)
        if resolved is None:
            continue

        target = locate_target(resolved, contents)
        if target is None or target in visited:
            continue
        visited.add(target)

        match direct_violations(target, contents, alias_table, project_root, config):
            case Failure(error):
                logger.debug("Transitive target %s not parsed: %s", target, error.message)
            case Success(target_reasons) if target_reasons:
                reasons.append(
                    TransitiveImport(
                        import_path=edge.specifier,
                        resolved_path=target,
                        line=edge.line,
                        message=f'Transitive dependency via "{edge.specifier}" imports business logic',
                    )
                )
            case Success(_):
                pass

    return tuple(reasons)


__all__ = [
    "CANDIDATE_EXTENSIONS",
    "candidate_paths",
    "check_transitive",
    "locate_target",
]
