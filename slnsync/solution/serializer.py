"""Render a Document back into .sln text."""

from __future__ import annotations

from slnsync.config import (
    CRLF,
    SOLUTION_PROPERTIES,
    Document,
    ProjectEntry,
    PropertySection,
    SectionPhase,
)

_CONFIGURATIONS = ("Debug|Any CPU", "Release|Any CPU")


def _default_sections() -> list[PropertySection]:
    # Keep the solution node visible when the source declared no properties
    return [PropertySection(
        name=SOLUTION_PROPERTIES,
        phase=SectionPhase.PRE,
        entries=[("HideSolutionNode", "FALSE")],
    )]


def render_project(entry: ProjectEntry) -> str:
    return (
        f'Project("{{{entry.factory_id}}}") = "{entry.name}", "{entry.path}", '
        f'"{{{entry.id}}}"{entry.trailer}EndProject'
    )


def render_project_configurations(project_id: str) -> str:
    """The four active-config/build lines for one project."""
    lines = []
    for config in _CONFIGURATIONS:
        lines.append(f"\t\t{{{project_id}}}.{config}.ActiveCfg = {config}")
        lines.append(f"\t\t{{{project_id}}}.{config}.Build.0 = {config}")
    return CRLF.join(lines)


def render_section(section: PropertySection) -> str:
    parts = [f"\tGlobalSection({section.name}) = {section.phase.value}", CRLF]
    for key, value in section.entries:
        parts.append(f"\t\t{key} = {value}")
        parts.append(CRLF)
    parts.append("\tEndGlobalSection")
    return "".join(parts)


def serialize_solution(
    document: Document,
    format_version: str = "12.00",
    product_version: str = "15",
) -> str:
    """Serialise a Document using the fixed solution template.

    Solution folders get no configuration lines. A Document without any
    property sections is written with a default SolutionProperties block.
    """
    projects_text = CRLF.join(render_project(p) for p in document.projects)
    configurations_text = CRLF.join(
        render_project_configurations(p.id)
        for p in document.projects
        if not p.is_grouping
    )
    sections = document.sections or _default_sections()
    sections_text = CRLF.join(render_section(s) for s in sections)

    return CRLF.join([
        "",
        f"Microsoft Visual Studio Solution File, Format Version {format_version}",
        f"# Visual Studio {product_version}",
        projects_text,
        "Global",
        "\tGlobalSection(SolutionConfigurationPlatforms) = preSolution",
        *(f"\t\t{config} = {config}" for config in _CONFIGURATIONS),
        "\tEndGlobalSection",
        "\tGlobalSection(ProjectConfigurationPlatforms) = postSolution",
        configurations_text,
        "\tEndGlobalSection",
        sections_text,
        "EndGlobal",
        "",
    ])
