"""Inject discovered external projects into a parsed solution."""

from __future__ import annotations

import copy
import logging
from typing import Iterable

from slnsync.config import (
    CRLF,
    NESTED_PROJECTS,
    SOLUTION_FOLDER_GUID,
    DiscoveredProject,
    Document,
    ProjectEntry,
    PropertySection,
    SectionPhase,
)
from slnsync.paths import is_external
from slnsync.solution.guids import (
    EXTERNAL_FOLDER_GUID,
    EXTERNAL_FOLDER_NAME,
    project_guid,
    solution_guid,
)

logger = logging.getLogger(__name__)


def _external_folder() -> ProjectEntry:
    return ProjectEntry(
        factory_id=SOLUTION_FOLDER_GUID,
        name=EXTERNAL_FOLDER_NAME,
        path=EXTERNAL_FOLDER_NAME,
        id=EXTERNAL_FOLDER_GUID,
        trailer=CRLF,
    )


def _new_entries(
    document: Document,
    solution_path: str,
    discovered: Iterable[DiscoveredProject],
) -> list[ProjectEntry]:
    """Build entries for candidates not already referenced externally.

    De-duplication is by name only: an external entry with the same name
    suppresses the candidate whatever its path.
    """
    known = {
        p.name for p in document.projects
        if is_external(solution_path, p.path)
    }

    entries = []
    for candidate in discovered:
        if candidate.name in known:
            logger.debug(f"Skipping {candidate.name}: already referenced")
            continue
        known.add(candidate.name)
        entries.append(ProjectEntry(
            factory_id=solution_guid(is_sdk=True),
            name=candidate.name,
            path=candidate.path,
            id=project_guid(candidate.name),
            trailer=CRLF,
        ))
    return entries


def merge_projects(
    document: Document,
    solution_path: str,
    discovered: Iterable[DiscoveredProject],
) -> Document:
    """Return a copy of ``document`` with the discovered projects added.

    New projects are nested under the first solution folder found (an
    "External" folder is created when there is none) via the NestedProjects
    section. Merging the same candidates twice adds nothing the second time.
    """
    merged = copy.deepcopy(document)
    new_entries = _new_entries(merged, solution_path, discovered)
    if not new_entries:
        return merged

    folder = next((p for p in merged.projects if p.is_grouping), None)
    if folder is None:
        folder = _external_folder()
        merged.projects.append(folder)
        logger.debug(f"Created solution folder {folder.name}")

    nested = merged.find_section(NESTED_PROJECTS)
    if nested is None:
        nested = PropertySection(name=NESTED_PROJECTS, phase=SectionPhase.PRE)
        merged.sections.append(nested)

    for entry in new_entries:
        nested.entries.append((f"{{{entry.id}}}", f"{{{folder.id}}}"))
        logger.debug(f"Adding {entry.name} -> {entry.path}")

    merged.projects.extend(new_entries)
    return merged


def added_projects(before: Document, after: Document) -> list[ProjectEntry]:
    """Entries of ``after`` whose ids do not appear in ``before``."""
    existing = {p.id.upper() for p in before.projects}
    return [p for p in after.projects if p.id.upper() not in existing]
