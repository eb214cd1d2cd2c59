"""slnsync CLI - keep a generated solution in step with external projects."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from slnsync.config import SyncConfig
from slnsync.nesting import build_nesting_graph, display_order
from slnsync.pipeline import run_sync
from slnsync.solution.parser import parse_solution


@click.group()
def cli() -> None:
    """slnsync - Merge external project files into a Visual Studio solution."""
    pass


def _run_with_progress(config: SyncConfig):
    """Run the sync with Rich progress display."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    console = Console(stderr=config.dry_run)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_phase(name, label):
            progress.update(task, description=label)

        result = run_sync(config, progress_callback=on_phase)

    table = Table(title=f"slnsync: {Path(config.solution_path).name}", show_edge=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Discovered", str(result.discovered))
    table.add_row("Added", str(len(result.added)))
    table.add_row("Changed", "yes" if result.changed else "no")
    if result.added:
        table.add_row("New projects", ", ".join(result.added))

    duration = sum(result.timings.values()) * 1000
    table.add_row("Duration", f"{duration:.1f}ms")

    console.print(table)

    if config.verbose and result.timings:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("Phase", style="bold")
        timing_table.add_column("Time (ms)", justify="right")
        for phase, seconds in result.timings.items():
            timing_table.add_row(phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    return result


@cli.command("sync")
@click.argument("solution", type=click.Path(exists=True, dir_okay=False))
@click.option("--source-dir", default=None, type=click.Path(file_okay=False),
              help="Directory to search for projects (default: ../Source)")
@click.option("--pattern", default="*.csproj", help="Project file glob")
@click.option("--format-version", default="12.00", help="Solution file format version")
@click.option("--product-version", default="15", help="Visual Studio major version")
@click.option("--separator", default="\\", help="Path separator for new project paths")
@click.option("--exclude", multiple=True, help="Additional directory patterns to skip")
@click.option("-o", "--output", "output_path", default=None,
              help="Write to this file instead of the solution")
@click.option("--dry-run", is_flag=True, help="Print the regenerated solution to stdout")
@click.option("--verbose", is_flag=True, help="Debug logging and per-phase timings")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def sync_cmd(
    solution: str,
    source_dir: str | None,
    pattern: str,
    format_version: str,
    product_version: str,
    separator: str,
    exclude: tuple[str, ...],
    output_path: str | None,
    dry_run: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Add project files found under the source directory to SOLUTION."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = SyncConfig(
        solution_path=os.path.abspath(solution),
        source_dir=source_dir,
        pattern=pattern,
        format_version=format_version,
        product_version=product_version,
        path_separator=separator,
        exclude_patterns=list(exclude),
        output_path=output_path,
        dry_run=dry_run,
        verbose=verbose,
        quiet=quiet,
    )

    if quiet:
        result = run_sync(config)
    else:
        result = _run_with_progress(config)

    if dry_run:
        click.echo(result.text, nl=False)


@cli.command("show")
@click.argument("solution", type=click.Path(exists=True, dir_okay=False))
def show_cmd(solution: str) -> None:
    """List the projects of SOLUTION and its solution folder tree."""
    from rich.console import Console
    from rich.table import Table
    from rich.tree import Tree

    console = Console()
    document = parse_solution(solution)

    table = Table(title=Path(solution).name, show_edge=False)
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Id")
    table.add_column("Kind")
    for project in document.projects:
        kind = "folder" if project.is_grouping else "project"
        table.add_row(project.name, project.path, project.id, kind)
    console.print(table)

    graph = build_nesting_graph(document)
    tree = Tree(Path(solution).stem)
    seen: set[str] = set()

    def _add(branch: Tree, node: str) -> None:
        # NestedProjects is not guaranteed acyclic
        if node in seen:
            return
        seen.add(node)
        name = graph.nodes[node].get("name") or f"{{{node}}}"
        child_branch = branch.add(name)
        for child in graph.successors(node):
            _add(child_branch, child)

    for root in display_order(graph):
        _add(tree, root)
    console.print(tree)


if __name__ == "__main__":
    cli()
