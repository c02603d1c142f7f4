"""Tests for RulekitSettings priority chain."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from rulekit.config.settings import RulekitSettings


def _write_config(directory: Path, content: str) -> Path:
    path = directory / "rulekit.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        settings = RulekitSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.modes.output == ".roomodes"
        assert settings.modes.groups == ["read", "edit", "browser", "command", "mcp"]
        assert settings.documents.override_dir == ".rulekit/documents"
        assert settings.check.min_severity == "warning"
        assert settings.json_output is False


class TestToml:
    def test_sections_loaded(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[modes]\nformat = "yaml"\n\n[check]\nmin_severity = "error"\n')
        settings = RulekitSettings.from_cli(root=tmp_path)
        assert settings.modes.format == "yaml"
        assert settings.modes.output == ".roomodes"
        assert settings.check.min_severity == "error"

    def test_root_is_config_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_config(tmp_path, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = RulekitSettings.from_cli()
        assert settings.root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        other = tmp_path / "elsewhere"
        other.mkdir()
        path = _write_config(other, '[modes]\ndirectory = "modes"\n')
        settings = RulekitSettings.from_cli(config_path=str(path), root=tmp_path)
        assert settings.config_path == path
        assert settings.modes.directory == "modes"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[modes\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            RulekitSettings.from_cli(root=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[modes]\nformat = "xml"\n')
        with pytest.raises(ValueError):
            RulekitSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = RulekitSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "quiet = false\n")
        monkeypatch.setenv("RULEKIT_QUIET", "true")
        settings = RulekitSettings.from_cli(root=tmp_path)
        assert settings.quiet is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = RulekitSettings.from_cli(root=tmp_path)
        with pytest.raises(ValueError):
            settings.quiet = True  # type: ignore[misc]
