"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rulekit.toml only contains overrides.
A fresh workspace needs no sections at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from rulekit.domain.modes import DEFAULT_MODE_GROUPS

OutputFormat = Literal["json", "yaml"]
Severity = Literal["warning", "error"]


# --- rulekit.toml sections ---


class ModesConfig(BaseModel):
    """[modes] section."""

    model_config = {"frozen": True}

    directory: str = "."
    pattern: str = "*-mode.md"
    output: str = ".roomodes"
    format: OutputFormat = "json"
    groups: list[str] = Field(default_factory=lambda: list(DEFAULT_MODE_GROUPS))
    source: str = "project"


class DocumentsConfig(BaseModel):
    """[documents] section."""

    model_config = {"frozen": True}

    override_dir: str = ".rulekit/documents"


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    min_severity: Severity = "warning"
