"""Core data types and configuration for solution syncing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

CRLF = "\r\n"

# Project factory GUID marking a solution folder
SOLUTION_FOLDER_GUID = "2150E333-8FDC-42A3-9474-1A3956D46DE8"

NESTED_PROJECTS = "NestedProjects"
SOLUTION_PROPERTIES = "SolutionProperties"


class SectionPhase(str, Enum):
    PRE = "preSolution"
    POST = "postSolution"


@dataclass
class ProjectEntry:
    """A Project ... EndProject declaration.

    GUIDs are stored without braces. ``trailer`` is everything between the
    declaration header and ``EndProject``, replayed verbatim on output.
    """
    factory_id: str
    name: str
    path: str
    id: str
    trailer: str = CRLF

    @property
    def is_grouping(self) -> bool:
        return self.factory_id.upper() == SOLUTION_FOLDER_GUID


@dataclass
class PropertySection:
    """A GlobalSection block. Entries keep their order and duplicates."""
    name: str
    phase: SectionPhase
    entries: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class Document:
    projects: list[ProjectEntry] = field(default_factory=list)
    sections: list[PropertySection] = field(default_factory=list)

    def find_section(self, name: str) -> PropertySection | None:
        for section in self.sections:
            if section.name == name:
                return section
        return None


@dataclass
class DiscoveredProject:
    """A project file found on disk, path relative to the solution."""
    name: str
    path: str


@dataclass
class SyncConfig:
    solution_path: str = ""
    source_dir: str | None = None
    pattern: str = "*.csproj"
    format_version: str = "12.00"
    product_version: str = "15"
    path_separator: str = "\\"
    exclude_patterns: list[str] = field(default_factory=list)
    output_path: str | None = None
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False


@dataclass
class SyncResult:
    text: str = ""
    changed: bool = False
    discovered: int = 0
    added: list[str] = field(default_factory=list)
    timings: dict[str, float] = field(default_factory=dict)
