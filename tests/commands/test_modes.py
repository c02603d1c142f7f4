"""Tests for the ``modes`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from rulekit.cli import cli

CODER = "# Coder Mode\n\nYou write code.\n\n## Custom Instructions\nTest first.\n"
PLANNER = "# Planner Mode\n\nYou plan.\n"


@pytest.fixture
def mode_files(workspace_root: Path) -> Path:
    (workspace_root / "coder-mode.md").write_text(CODER, encoding="utf-8")
    (workspace_root / "planner-mode.md").write_text(PLANNER, encoding="utf-8")
    return workspace_root


@pytest.mark.usefixtures("_isolated_workspace", "mode_files")
class TestGenerate:
    def test_writes_roomodes(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["modes", "generate"])
        assert result.exit_code == 0, result.output
        assert "generate_modes" in result.stdout
        assert "coder" in result.stdout
        config = json.loads((workspace_root / ".roomodes").read_text(encoding="utf-8"))
        assert [m["slug"] for m in config["customModes"]] == ["coder", "planner"]

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "modes", "generate"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "generate_modes"
        assert payload["data"]["count"] == 2

    def test_dry_run_prints_content(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["modes", "generate", "--dry-run", "--format", "yaml"])
        assert result.exit_code == 0
        assert "customModes:" in result.stdout
        assert not (workspace_root / ".roomodes").exists()

    def test_parse_warning_goes_to_stderr(
        self, cli_runner: CliRunner, workspace_root: Path
    ) -> None:
        (workspace_root / "broken-mode.md").write_text("no heading\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["modes", "generate"])
        assert result.exit_code == 0
        assert "WARNING: Error parsing broken-mode.md" in result.stderr
        assert "WARNING" not in result.stdout

    def test_missing_directory_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["modes", "generate", "--dir", "nope"])
        assert result.exit_code == 1
        assert "Mode directory not found" in result.stderr

    def test_quiet_lists_slugs(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "modes", "generate"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["coder", "planner"]


@pytest.mark.usefixtures("_isolated_workspace")
class TestStub:
    def test_comma_separated_names(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["modes", "stub", "prodigy,coder", "maestro"])
        assert result.exit_code == 0, result.output
        config = json.loads((workspace_root / ".roomodes").read_text(encoding="utf-8"))
        assert [m["slug"] for m in config["customModes"]] == ["coder", "maestro", "prodigy"]

    def test_names_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["modes", "stub"])
        assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_workspace", "mode_files")
class TestList:
    def test_lists_modes(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["modes", "list"])
        assert result.exit_code == 0
        assert "Coder" in result.stdout
        assert "Planner" in result.stdout
        assert not (workspace_root / ".roomodes").exists()

    def test_empty_directory(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "empty").mkdir()
        result = cli_runner.invoke(cli, ["modes", "list", "--dir", "empty"])
        assert result.exit_code == 0
        assert "No mode files found" in result.stdout


@pytest.mark.usefixtures("_isolated_workspace")
class TestNew:
    def test_creates_file(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        result = cli_runner.invoke(cli, ["modes", "new", "Code Analyst", "--dir", "modes"])
        assert result.exit_code == 0, result.output
        assert (workspace_root / "modes" / "code-analyst-mode.md").is_file()

    def test_existing_file_fails(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "coder-mode.md").write_text(CODER, encoding="utf-8")
        result = cli_runner.invoke(cli, ["modes", "new", "Coder"])
        assert result.exit_code == 1
        assert "already exists" in result.stderr


@pytest.mark.usefixtures("_isolated_workspace")
class TestBracketedModeNames:
    def test_generate_with_closing_tag(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "qa-mode.md").write_text(
            "# QA [/beta] Mode\n\nTest.\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["modes", "generate"])
        assert result.exit_code == 0, result.output
        assert "QA [/beta]" in result.stdout

    def test_list_keeps_tag_text(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "qa-mode.md").write_text(
            "# QA [beta] Mode\n\nTest.\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["modes", "list"])
        assert result.exit_code == 0
        assert "QA [beta]" in result.stdout
