"""Workspace — the single dependency injected into every service.

A workspace is a directory (usually the one holding ``rulekit.toml``) plus
the settings in effect for it. It owns path resolution and the lazily
built Jinja2 environments for packaged documents and scaffolding templates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rulekit.infrastructure.filesystem import resolve_in_root
from rulekit.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from rulekit.config.settings import RulekitSettings

logger = logging.getLogger(__name__)


class Workspace:
    """Filesystem root plus settings, shared by all services."""

    def __init__(self, settings: RulekitSettings) -> None:
        self.settings = settings
        self.root: Path = settings.root
        self._environments: dict[str, Environment] = {}

    @property
    def override_dir(self) -> Path:
        """Directory whose documents shadow the packaged ones."""
        return self.root / self.settings.documents.override_dir

    def resolve(self, target: str | Path) -> Path:
        """Resolve a user-supplied path against the workspace root."""
        return resolve_in_root(self.root, target)

    def templates(self, group: str) -> Environment:
        """Jinja2 environment for a template group (``documents``, ``modes``, ``init``)."""
        env = self._environments.get(group)
        if env is None:
            override = self.override_dir if group == "documents" else None
            env = build_template_environment(group, override_dir=override)
            self._environments[group] = env
            logger.debug("Built template environment for %s (override=%s)", group, override)
        return env
