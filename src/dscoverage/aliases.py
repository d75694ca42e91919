# File: src/dscoverage/aliases.py
"""Import specifier resolution through a tsconfig-style alias table.

Specifiers are rewritten to absolute paths by plain path arithmetic: alias
patterns first (declaration order, first match wins), then relative and
root-absolute specifiers. Bare package specifiers are external and resolve to
``None``. Whether a file actually exists at the resolved location is decided
later by the caller.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

TSCONFIG_FILENAME = "tsconfig.json"


@dataclass(frozen=True)
class AliasEntry:
    """One ``compilerOptions.paths`` mapping.

    Attributes:
        pattern: Specifier pattern; ``*`` captures the variable part
        replacement: Target path; ``*`` receives the captured text
        base_dir: Directory the replacement is relative to (project root if None)
    """

    pattern: str
    replacement: str
    base_dir: str | None = None

    def match(self, specifier: str) -> str | None:
        """Return the substituted replacement if ``specifier`` matches."""
        regex = "^" + re.escape(self.pattern).replace(r"\*", "(.+)") + "$"
        found = re.match(regex, specifier)
        if found is None:
            return None
        capture = found.group(1) if found.groups() else ""
        return self.replacement.replace("*", capture)


AliasTable = tuple[AliasEntry, ...]


def resolve_specifier(
    specifier: str,
    alias_table: AliasTable,
    project_root: str,
    current_dir: str,
) -> str | None:
    """Resolve an import specifier to an absolute path.

    Args:
        specifier: Module specifier exactly as written in the import
        alias_table: Alias entries in declaration order
        project_root: Absolute project root
        current_dir: Directory of the importing file

    Returns:
        Absolute, normalised path, or None for external packages
    """
    for entry in alias_table:
        substituted = entry.match(specifier)
        if substituted is not None:
            base = entry.base_dir or project_root
            return os.path.abspath(os.path.join(project_root, base, substituted))

    if specifier.startswith("/"):
        return os.path.abspath(os.path.join(project_root, specifier[1:]))
    if specifier.startswith("."):
        return os.path.abspath(os.path.join(current_dir, specifier))

    return None


# --------------------------------------------------------------------------- #
# tsconfig.json loading                                                       #
# --------------------------------------------------------------------------- #


_JSONC_TOKEN = re.compile(
    r'"(?:\\.|[^"\\])*"'  # string literal, kept verbatim
    r"|//[^\n]*"  # line comment
    r"|/\*.*?\*/",  # block comment
    re.DOTALL,
)
_TRAILING_COMMA = re.compile(r'("(?:\\.|[^"\\])*")|,(\s*[}\]])')


def _strip_jsonc(text: str) -> str:
    """Remove comments and trailing commas that tsconfig files allow."""
    without_comments = _JSONC_TOKEN.sub(
        lambda m: m.group(0) if m.group(0).startswith('"') else "",
        text,
    )
    return _TRAILING_COMMA.sub(lambda m: m.group(1) or m.group(2), without_comments)


@dataclass(frozen=True)
class _PathOptions:
    """``baseUrl`` / ``paths`` of one tsconfig, with directories made absolute."""

    base_url: str | None
    paths: dict[str, object] | None
    paths_dir: str | None

    def merged_over(self, base: _PathOptions) -> _PathOptions:
        """Own settings win; missing ones are inherited from ``base``."""
        own_paths = self.paths is not None
        return _PathOptions(
            base_url=self.base_url if self.base_url is not None else base.base_url,
            paths=self.paths if own_paths else base.paths,
            paths_dir=self.paths_dir if own_paths else base.paths_dir,
        )


def _read_tsconfig(path: Path) -> dict[str, object] | None:
    try:
        data = json.loads(_strip_jsonc(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def _path_options(data: dict[str, object], config_dir: Path, paths_dir: str | None) -> _PathOptions:
    compiler_options = data.get("compilerOptions")
    if not isinstance(compiler_options, dict):
        return _PathOptions(base_url=None, paths=None, paths_dir=None)
    base_url = compiler_options.get("baseUrl")
    paths = compiler_options.get("paths")
    return _PathOptions(
        base_url=str((config_dir / base_url).resolve()) if isinstance(base_url, str) else None,
        paths=paths if isinstance(paths, dict) else None,
        paths_dir=paths_dir,
    )


def _extended_config_path(tsconfig_path: Path, data: dict[str, object]) -> Path | None:
    """Locate a relative ``extends`` target; package-name bases are not followed."""
    extends = data.get("extends")
    if not isinstance(extends, str):
        return None
    if not extends.startswith("."):
        logger.debug("Not following non-relative extends %r in %s", extends, tsconfig_path)
        return None
    target = tsconfig_path.parent / extends
    if not target.is_file() and target.suffix != ".json":
        target = target.with_name(target.name + ".json")
    if not target.is_file():
        logger.warning("Extended tsconfig not found: %s", target)
        return None
    return target


def _alias_entries(options: _PathOptions) -> AliasTable:
    if options.paths is None:
        return ()
    base_dir = options.base_url if options.base_url is not None else options.paths_dir

    entries: list[AliasEntry] = []
    for pattern, replacements in options.paths.items():
        if not isinstance(replacements, list) or not replacements:
            continue
        first = replacements[0]
        if isinstance(first, str) and first:
            entries.append(AliasEntry(pattern=pattern, replacement=first, base_dir=base_dir))
    return tuple(entries)


def load_alias_table(project_root: Path) -> AliasTable:
    """Build the alias table from ``<project_root>/tsconfig.json``.

    A relative ``extends`` is followed one level: ``baseUrl`` and ``paths``
    missing from the project tsconfig are taken from the extended file and
    resolved against its directory.

    A missing, unreadable or malformed tsconfig is not an error: analysis
    proceeds with an empty table and relative specifiers still resolve.
    """
    tsconfig_path = project_root / TSCONFIG_FILENAME
    if not tsconfig_path.is_file():
        logger.debug("No %s in %s; using empty alias table", TSCONFIG_FILENAME, project_root)
        return ()

    data = _read_tsconfig(tsconfig_path)
    if data is None:
        return ()

    options = _path_options(data, project_root, paths_dir=None)
    base_path = _extended_config_path(tsconfig_path, data)
    if base_path is not None:
        base_data = _read_tsconfig(base_path)
        if base_data is not None:
            base_dir = base_path.parent.resolve()
            options = options.merged_over(_path_options(base_data, base_dir, paths_dir=str(base_dir)))

    table = _alias_entries(options)
    logger.debug("Loaded %d path aliases from %s", len(table), tsconfig_path)
    return table


__all__ = [
    "AliasEntry",
    "AliasTable",
    "TSCONFIG_FILENAME",
    "load_alias_table",
    "resolve_specifier",
]
