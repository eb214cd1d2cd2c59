"""Find candidate project files under a source tree."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Build output only; hidden directories (.git, .vs, ...) are skipped separately
DEFAULT_IGNORE = {"bin", "obj"}


def _should_ignore(name: str, ignore_patterns: set[str]) -> bool:
    """Check if a directory name matches ignore patterns."""
    if name.startswith("."):
        return True
    return any(fnmatch.fnmatch(name, pattern) for pattern in ignore_patterns)


def default_search_dir(solution_path: str) -> str:
    """The ``Source`` directory next to the solution's parent directory.

    For ``Project/Client/Client.sln`` this is ``Project/Source``.
    """
    sln_dir = os.path.dirname(os.path.abspath(solution_path))
    return os.path.join(os.path.dirname(sln_dir), "Source")


def find_project_files(
    search_dir: str,
    pattern: str = "*.csproj",
    exclude_patterns: list[str] | tuple[str, ...] = (),
) -> list[str]:
    """Recursively collect files matching ``pattern`` under ``search_dir``.

    Returns absolute paths in sorted order, or an empty list when the
    directory does not exist.
    """
    root = Path(search_dir)
    if not root.is_dir():
        logger.info(f"Search directory {search_dir} does not exist")
        return []

    ignore_patterns = set(DEFAULT_IGNORE)
    ignore_patterns.update(exclude_patterns)

    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Filter ignored directories in-place
        dirnames[:] = [
            d for d in sorted(dirnames)
            if not _should_ignore(d, ignore_patterns)
        ]
        for filename in sorted(filenames):
            if fnmatch.fnmatch(filename, pattern):
                found.append(os.path.abspath(os.path.join(dirpath, filename)))

    logger.debug(f"Found {len(found)} project files under {search_dir}")
    return sorted(found)
