"""Sync a solution file with the project files found on disk."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from slnsync.config import DiscoveredProject, SyncConfig, SyncResult
from slnsync.discovery import default_search_dir, find_project_files
from slnsync.paths import relative_path
from slnsync.solution.merger import added_projects, merge_projects
from slnsync.solution.parser import parse_solution_text
from slnsync.solution.serializer import serialize_solution

logger = logging.getLogger(__name__)


_PHASE_LABELS = {
    "read": "Reading solution",
    "discover": "Discovering project files",
    "sync": "Merging and regenerating",
    "write": "Writing solution",
}


def discover_projects(solution_path: str, config: SyncConfig) -> list[DiscoveredProject]:
    """Find candidate projects and express their paths relative to the solution."""
    search_dir = config.source_dir or default_search_dir(solution_path)
    files = find_project_files(search_dir, config.pattern, config.exclude_patterns)
    sln_path = os.path.abspath(solution_path)
    return [
        DiscoveredProject(
            name=Path(f).stem,
            path=relative_path(sln_path, f, sep=config.path_separator),
        )
        for f in files
    ]


def sync_solution_text(
    solution_path: str,
    content: str,
    config: SyncConfig,
    discovered: list[DiscoveredProject] | None = None,
) -> SyncResult:
    """Merge discovered projects into ``content`` and regenerate it.

    When nothing is discovered the input text is returned unchanged.
    ``discovered`` may be passed in to skip the directory walk.
    """
    if discovered is None:
        discovered = discover_projects(solution_path, config)

    if not discovered:
        return SyncResult(text=content, changed=False, discovered=0)

    document = parse_solution_text(content)
    merged = merge_projects(document, solution_path, discovered)
    text = serialize_solution(merged, config.format_version, config.product_version)

    added = [p.name for p in added_projects(document, merged) if not p.is_grouping]
    logger.info(
        f"{solution_path}: {len(discovered)} discovered, {len(added)} added"
    )

    return SyncResult(
        text=text,
        changed=text != content,
        discovered=len(discovered),
        added=added,
    )


def run_sync(
    config: SyncConfig,
    progress_callback=None,
) -> SyncResult:
    """Read, sync and (unless ``dry_run``) write back the solution file.

    Args:
        config: Sync configuration.
        progress_callback: Optional callable(phase_name, label) invoked
            when each phase starts. Used by the CLI for Rich progress.
    """
    timings: dict[str, float] = {}
    state: dict = {}

    def _read() -> None:
        with open(config.solution_path, "r", encoding="utf-8-sig", newline="") as f:
            state["content"] = f.read()

    def _discover() -> None:
        state["discovered"] = discover_projects(config.solution_path, config)

    def _sync() -> None:
        state["result"] = sync_solution_text(
            config.solution_path, state["content"], config, state["discovered"],
        )

    def _write() -> None:
        result = state["result"]
        if config.dry_run:
            return
        # Leave an unchanged solution untouched on disk
        if not result.changed and not config.output_path:
            return
        output = Path(config.output_path or config.solution_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(result.text)
        logger.info(f"Wrote {output}")

    phases = [
        ("read", _read),
        ("discover", _discover),
        ("sync", _sync),
        ("write", _write),
    ]

    for name, phase_fn in phases:
        if progress_callback:
            progress_callback(name, _PHASE_LABELS.get(name, name))
        start = time.monotonic()
        phase_fn()
        timings[name] = time.monotonic() - start

    result = state["result"]
    result.timings = timings
    return result
