"""InitService — write a starter ``rulekit.toml`` for a workspace."""

from __future__ import annotations

import logging
from pathlib import Path

from rulekit.config.discovery import CONFIG_FILENAME
from rulekit.config.models import DocumentsConfig
from rulekit.infrastructure.filesystem import write_text_file
from rulekit.infrastructure.templates import build_template_environment
from rulekit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class InitService:
    """Workspace initialization. Runs before any workspace exists."""

    @staticmethod
    def init_workspace(
        path: Path,
        *,
        modes_dir: str = ".",
        fmt: str = "json",
        force: bool = False,
    ) -> ServiceResult:
        op = "init"
        config_path = path / CONFIG_FILENAME
        if config_path.exists() and not force:
            return ServiceResult.failure(
                op,
                "ALREADY_INITIALIZED",
                f"{CONFIG_FILENAME} already exists in {path}",
                path=str(config_path),
            )

        env = build_template_environment("init")
        content = env.get_template(f"{CONFIG_FILENAME}.j2").render(
            modes_dir=modes_dir,
            fmt=fmt,
            override_dir=DocumentsConfig().override_dir,
        )
        override_dir = path / DocumentsConfig().override_dir
        try:
            write_text_file(config_path, content)
            override_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return ServiceResult.failure(
                op, "WRITE_FAILED", f"Could not initialize {path}: {exc}", path=str(path)
            )
        logger.info("Initialized workspace at %s", path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "config": str(config_path),
                "override_dir": str(override_dir),
            },
        )
