"""Tests for the sync pipeline and CLI."""

from __future__ import annotations

import os

from click.testing import CliRunner

from slnsync.cli import cli
from slnsync.config import DiscoveredProject, SyncConfig
from slnsync.pipeline import discover_projects, run_sync, sync_solution_text
from slnsync.solution.guids import EXTERNAL_FOLDER_GUID, project_guid

UNITY_SLN = (
    "\r\nMicrosoft Visual Studio Solution File, Format Version 11.00\r\n"
    "# Visual Studio 2010\r\n"
    'Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Assembly-CSharp", '
    '"Assembly-CSharp.csproj", "{1D2A4B9E-0F3C-4A5B-8C7D-112233445566}"\r\n'
    "EndProject\r\n"
    "Global\r\n"
    "\tGlobalSection(SolutionProperties) = preSolution\r\n"
    "\t\tHideSolutionNode = FALSE\r\n"
    "\tEndGlobalSection\r\n"
    "EndGlobal\r\n"
)


def _write(path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _read(path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _game_tree(tmp_path, with_source: bool = True):
    """Game/Client/Client.sln plus Game/Source/Foo/Foo.csproj."""
    sln = tmp_path / "Game" / "Client" / "Client.sln"
    _write(sln, UNITY_SLN)
    if with_source:
        _write(tmp_path / "Game" / "Source" / "Foo" / "Foo.csproj", "<Project />")
    return sln


class TestDiscoverProjects:
    def test_relative_paths_with_separator(self, tmp_path):
        sln = _game_tree(tmp_path)
        config = SyncConfig(solution_path=str(sln))

        discovered = discover_projects(str(sln), config)

        assert discovered == [DiscoveredProject(name="Foo", path="..\\Source\\Foo\\Foo.csproj")]

    def test_explicit_source_dir(self, tmp_path):
        sln = _game_tree(tmp_path, with_source=False)
        _write(tmp_path / "Shared" / "Net" / "Net.csproj", "<Project />")
        config = SyncConfig(
            solution_path=str(sln), source_dir=str(tmp_path / "Shared"), path_separator="/",
        )

        discovered = discover_projects(str(sln), config)

        assert discovered == [DiscoveredProject(name="Net", path="../../Shared/Net/Net.csproj")]

    def test_solution_behind_symlink(self, tmp_path):
        _game_tree(tmp_path / "real")
        link = tmp_path / "link"
        os.symlink(str(tmp_path / "real"), str(link))
        sln = link / "Game" / "Client" / "Client.sln"

        discovered = discover_projects(str(sln), SyncConfig(solution_path=str(sln)))

        assert discovered == [DiscoveredProject(name="Foo", path="..\\Source\\Foo\\Foo.csproj")]


class TestSyncSolutionText:
    def test_no_source_directory_returns_input(self, tmp_path):
        sln = _game_tree(tmp_path, with_source=False)
        config = SyncConfig(solution_path=str(sln))

        result = sync_solution_text(str(sln), UNITY_SLN, config)

        assert result.text == UNITY_SLN
        assert result.changed is False
        assert result.discovered == 0

    def test_adds_discovered_project(self, tmp_path):
        sln = _game_tree(tmp_path)
        config = SyncConfig(solution_path=str(sln))

        result = sync_solution_text(str(sln), UNITY_SLN, config)

        assert result.changed is True
        assert result.discovered == 1
        assert result.added == ["Foo"]
        assert (
            f'Project("{{9A19103F-16F7-4668-BE54-9A1E7A4F7556}}") = "Foo", '
            f'"..\\Source\\Foo\\Foo.csproj", "{{{project_guid("Foo")}}}"\r\nEndProject'
        ) in result.text
        assert f"\t\t{{{project_guid('Foo')}}} = {{{EXTERNAL_FOLDER_GUID}}}\r\n" in result.text
        assert "Format Version 12.00\r\n# Visual Studio 15\r\n" in result.text

    def test_versions_from_config(self):
        config = SyncConfig(format_version="11.00", product_version="2010")
        discovered = [DiscoveredProject(name="Foo", path="../Source/Foo/Foo.csproj")]

        result = sync_solution_text("/work/Client/Client.sln", UNITY_SLN, config, discovered)

        assert "Format Version 11.00\r\n# Visual Studio 2010\r\n" in result.text

    def test_second_sync_is_unchanged(self, tmp_path):
        sln = _game_tree(tmp_path)
        config = SyncConfig(solution_path=str(sln))

        first = sync_solution_text(str(sln), UNITY_SLN, config)
        second = sync_solution_text(str(sln), first.text, config)

        assert second.text == first.text
        assert second.changed is False
        assert second.added == []


class TestRunSync:
    def test_writes_solution_in_place(self, tmp_path):
        sln = _game_tree(tmp_path)
        phases = []

        result = run_sync(
            SyncConfig(solution_path=str(sln)),
            progress_callback=lambda name, label: phases.append(name),
        )

        assert phases == ["read", "discover", "sync", "write"]
        assert set(result.timings) == set(phases)
        assert _read(sln) == result.text
        assert '"Foo"' in _read(sln)

    def test_dry_run_leaves_file(self, tmp_path):
        sln = _game_tree(tmp_path)

        result = run_sync(SyncConfig(solution_path=str(sln), dry_run=True))

        assert result.changed is True
        assert _read(sln) == UNITY_SLN

    def test_output_path(self, tmp_path):
        sln = _game_tree(tmp_path)
        output = tmp_path / "out" / "Merged.sln"

        result = run_sync(SyncConfig(solution_path=str(sln), output_path=str(output)))

        assert _read(output) == result.text
        assert _read(sln) == UNITY_SLN

    def test_missing_source_keeps_file(self, tmp_path):
        sln = _game_tree(tmp_path, with_source=False)

        result = run_sync(SyncConfig(solution_path=str(sln)))

        assert result.changed is False
        assert _read(sln) == UNITY_SLN


class TestCLI:
    def test_sync_quiet(self, tmp_path):
        sln = _game_tree(tmp_path)
        runner = CliRunner()

        result = runner.invoke(cli, ["sync", str(sln), "--quiet"])

        assert result.exit_code == 0
        assert result.output == ""
        assert '"Foo"' in _read(sln)

    def test_sync_dry_run_prints_solution(self, tmp_path):
        sln = _game_tree(tmp_path)
        runner = CliRunner()

        result = runner.invoke(cli, ["sync", str(sln), "--dry-run", "--quiet", "--separator", "/"])

        assert result.exit_code == 0
        assert '"../Source/Foo/Foo.csproj"' in result.output
        assert _read(sln) == UNITY_SLN

    def test_sync_summary(self, tmp_path):
        sln = _game_tree(tmp_path)
        runner = CliRunner()

        result = runner.invoke(cli, ["sync", str(sln)])

        assert result.exit_code == 0
        assert "Discovered" in result.output
        assert "Foo" in result.output

    def test_sync_missing_solution(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["sync", os.path.join(str(tmp_path), "Nope.sln")])
        assert result.exit_code != 0

    def test_show(self, tmp_path):
        sln = _game_tree(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["sync", str(sln), "--quiet"])

        result = runner.invoke(cli, ["show", str(sln)])

        assert result.exit_code == 0
        assert "Assembly-CSharp" in result.output
        assert "External" in result.output
        assert "Foo" in result.output

    def test_show_lists_cyclic_nesting(self, tmp_path):
        sln = tmp_path / "Cyclic.sln"
        _write(sln, (
            'Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "Alpha", "Alpha", '
            '"{AAAAAAAA-0000-0000-0000-000000000000}"\r\nEndProject\r\n'
            'Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "Beta", "Beta", '
            '"{BBBBBBBB-0000-0000-0000-000000000000}"\r\nEndProject\r\n'
            "Global\r\n"
            "\tGlobalSection(NestedProjects) = preSolution\r\n"
            "\t\t{AAAAAAAA-0000-0000-0000-000000000000} = {BBBBBBBB-0000-0000-0000-000000000000}\r\n"
            "\t\t{BBBBBBBB-0000-0000-0000-000000000000} = {AAAAAAAA-0000-0000-0000-000000000000}\r\n"
            "\tEndGlobalSection\r\n"
            "EndGlobal\r\n"
        ))
        runner = CliRunner()

        result = runner.invoke(cli, ["show", str(sln)])

        assert result.exit_code == 0
        tree_text = result.output.rsplit("Cyclic", 1)[-1]
        assert "Alpha" in tree_text
        assert "Beta" in tree_text
