"""Shared pytest fixtures for rulekit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from rulekit.config.settings import RulekitSettings
from rulekit.infrastructure.workspace import Workspace


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings resolution."""
    monkeypatch.delenv("RULEKIT_CONFIG", raising=False)
    monkeypatch.delenv("RULEKIT_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace directory."""
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Workspace:
    """Workspace over the temp directory with default settings."""
    return Workspace(RulekitSettings.from_cli(root=workspace_root))


@pytest.fixture
def write_mode(workspace_root: Path) -> Callable[..., Path]:
    """Write a mode file into the workspace (or a subdirectory of it)."""

    def _write(filename: str, content: str, *, subdir: str = "") -> Path:
        directory = workspace_root / subdir if subdir else workspace_root
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp workspace so the CLI resolves paths there.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")``.
    """
    monkeypatch.chdir(workspace_root)
