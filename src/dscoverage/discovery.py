# File: src/dscoverage/discovery.py
"""Source file discovery and loading for the CLI."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dscoverage.imports import SOURCE_SUFFIXES


logger = logging.getLogger(__name__)

IGNORED_DIRECTORIES = frozenset({"node_modules", ".next", "dist", "build", "coverage", ".git"})


def _is_source_file(path: Path) -> bool:
    return path.suffix in SOURCE_SUFFIXES and not path.name.endswith(".d.ts")


def collect_source_files(project_root: Path, scan_dirs: tuple[str, ...]) -> list[Path]:
    """Collect frontend source files under the scan directories.

    Ignored directories are pruned during the walk, so their contents are
    never listed.

    Args:
        project_root: Absolute project root
        scan_dirs: Directories relative to the project root

    Returns:
        Sorted, de-duplicated absolute paths
    """
    files: set[Path] = set()
    for scan_dir in scan_dirs:
        base = (project_root / scan_dir).resolve()
        if not base.is_dir():
            logger.warning("Scan directory does not exist: %s", base)
            continue
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = [name for name in dirnames if name not in IGNORED_DIRECTORIES]
            directory = Path(dirpath)
            files.update(directory / name for name in filenames if _is_source_file(directory / name))
    return sorted(files)


def load_contents(paths: list[Path]) -> dict[str, str]:
    """Read files as UTF-8 into an absolute path -> text mapping.

    Unreadable files are skipped with a warning.
    """
    contents: dict[str, str] = {}
    for path in paths:
        try:
            contents[str(path)] = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
    logger.debug("Loaded %d source files", len(contents))
    return contents


__all__ = ["IGNORED_DIRECTORIES", "collect_source_files", "load_contents"]
