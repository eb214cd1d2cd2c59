"""Path helpers for solution-relative project paths."""

from __future__ import annotations

import os


def _normalise(path: str) -> str:
    # Solution files are usually written on Windows
    return path.replace("\\", "/")


def is_external(solution_path: str, project_path: str) -> bool:
    """True when the project does not live in the solution's own directory.

    Relative project paths are resolved against the solution directory.
    """
    if not project_path:
        return False

    sln_dir = os.path.dirname(os.path.abspath(_normalise(solution_path)))
    project_path = _normalise(project_path)
    if not os.path.isabs(project_path):
        project_path = os.path.join(sln_dir, project_path)
    project_dir = os.path.dirname(os.path.abspath(project_path))

    return project_dir != sln_dir


def relative_path(from_path: str, to_path: str, sep: str = os.sep) -> str:
    """Relative path from ``from_path`` to ``to_path``.

    A ``from_path`` with a file extension is taken to be a file, so the
    result is relative to its directory. Paths on different drives cannot
    be related and ``to_path`` is returned as is.
    """
    if not from_path:
        raise ValueError("from_path must not be empty")
    if not to_path:
        raise ValueError("to_path must not be empty")

    base = _normalise(from_path)
    if os.path.splitext(base)[1]:
        base = os.path.dirname(base)

    try:
        rel = os.path.relpath(_normalise(to_path), base or ".")
    except ValueError:
        return to_path

    return rel.replace(os.sep, "/").replace("/", sep)
