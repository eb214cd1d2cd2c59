"""Parse .sln files (custom text format, not XML)."""

from __future__ import annotations

import logging
import re

from slnsync.config import Document, ProjectEntry, PropertySection, SectionPhase

logger = logging.getLogger(__name__)


# Project("{TYPE-GUID}") = "Name", "Path\To\Project.csproj", "{PROJECT-GUID}"
#     ...trailer...
# EndProject
_PROJECT_RE = re.compile(
    r'Project\("\{(.*?)\}"\)\s+=\s+"(.*?)",\s+"(.*?)",\s+"\{(.*?)\}"(.*?)\bEndProject\b',
    re.DOTALL,
)

# GlobalSection(SolutionProperties) = preSolution ... EndGlobalSection
_SECTION_RE = re.compile(
    r"GlobalSection\((\w+Properties|NestedProjects)\)\s+=\s+((?:post|pre)Solution)(.*?)EndGlobalSection",
    re.DOTALL,
)


def _parse_entries(body: str) -> list[tuple[str, str]]:
    """Split a section body into (key, value) pairs on the first '='."""
    entries = []
    # Only \n ends a line; \r is removed by strip()
    for line in body.split("\n"):
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        entries.append((key.strip(), value.strip()))
    return entries


def parse_projects(content: str) -> list[ProjectEntry]:
    projects = []
    for match in _PROJECT_RE.finditer(content):
        projects.append(ProjectEntry(
            factory_id=match.group(1),
            name=match.group(2),
            path=match.group(3),
            id=match.group(4),
            trailer=match.group(5),
        ))
    return projects


def parse_sections(content: str) -> list[PropertySection]:
    sections = []
    for match in _SECTION_RE.finditer(content):
        sections.append(PropertySection(
            name=match.group(1),
            phase=SectionPhase(match.group(2)),
            entries=_parse_entries(match.group(3)),
        ))
    return sections


def parse_solution_text(content: str) -> Document:
    """Parse solution text into a Document.

    Never fails: text that does not match a Project or GlobalSection
    declaration is ignored, so malformed input yields empty lists.
    Sections other than ``*Properties`` and ``NestedProjects`` (for example
    the configuration platform tables) are not captured; they are rebuilt
    on serialisation.
    """
    return Document(
        projects=parse_projects(content),
        sections=parse_sections(content),
    )


def parse_solution(sln_path: str) -> Document:
    """Read and parse a .sln file. Unreadable files yield an empty Document."""
    try:
        with open(sln_path, "r", encoding="utf-8-sig", newline="") as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Failed to read {sln_path}: {e}")
        return Document()

    document = parse_solution_text(content)
    logger.debug(
        f"Parsed {sln_path}: {len(document.projects)} projects, "
        f"{len(document.sections)} sections"
    )
    return document
