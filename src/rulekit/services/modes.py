"""ModeService — build ``.roomodes`` from mode markdown files.

Per-file problems never fail a run: the file is skipped and reported as a
warning, and the remaining modes are still written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from rulekit.domain.modes import (
    ModeDefinition,
    ModeParseError,
    duplicate_slugs,
    mode_sort_key,
    normalize_slug,
    parse_mode_file,
    stub_mode,
)
from rulekit.infrastructure.filesystem import find_mode_files, write_text_file
from rulekit.infrastructure.roomodes import render_roomodes
from rulekit.services.base import BaseService
from rulekit.services.result import ServiceResult

logger = logging.getLogger(__name__)

MODE_TEMPLATE = "mode.md.j2"


class ModeService(BaseService):
    """Discover, parse, render, and scaffold custom modes."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(
        self,
        *,
        directory: str | None = None,
        output: str | None = None,
        fmt: str | None = None,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Parse every mode file in *directory* and write the config."""
        op = "generate_modes"
        cfg = self._settings.modes
        try:
            mode_dir = self._workspace.resolve(directory or cfg.directory)
            out_path = self._workspace.resolve(output or cfg.output)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))
        if not mode_dir.is_dir():
            return ServiceResult.failure(
                op, "DIR_NOT_FOUND", f"Mode directory not found: {mode_dir}", path=str(mode_dir)
            )

        warnings: list[str] = []
        parsed, skipped = self._collect(mode_dir, warnings)
        return self._write(
            op,
            parsed,
            out_path=out_path,
            fmt=fmt or cfg.format,
            dry_run=dry_run,
            warnings=warnings,
            extra={"directory": str(mode_dir), "skipped": skipped},
        )

    def stub(
        self,
        names: list[str],
        *,
        output: str | None = None,
        fmt: str | None = None,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Write a config of placeholder modes built from bare names."""
        op = "stub_modes"
        cfg = self._settings.modes
        clean = [n.strip() for n in names if n.strip()]
        if not clean:
            return ServiceResult.failure(op, "NO_NAMES", "At least one mode name is required")
        try:
            out_path = self._workspace.resolve(output or cfg.output)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))

        parsed = [
            (stub_mode(name, groups=cfg.groups, source=cfg.source), None) for name in clean
        ]
        return self._write(
            op,
            parsed,
            out_path=out_path,
            fmt=fmt or cfg.format,
            dry_run=dry_run,
            warnings=[],
            extra={},
        )

    def list_modes(self, *, directory: str | None = None) -> ServiceResult:
        """Parse mode files and report them without writing anything."""
        op = "list_modes"
        try:
            mode_dir = self._workspace.resolve(directory or self._settings.modes.directory)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))
        if not mode_dir.is_dir():
            return ServiceResult.failure(
                op, "DIR_NOT_FOUND", f"Mode directory not found: {mode_dir}", path=str(mode_dir)
            )

        warnings: list[str] = []
        parsed, skipped = self._collect(mode_dir, warnings)
        ordered = sorted(parsed, key=lambda pair: mode_sort_key(pair[0]))
        items = [self._summary(mode, path) for mode, path in ordered]
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": items, "count": len(items), "skipped": skipped},
            warnings=warnings,
        )

    def new_mode(
        self,
        name: str,
        *,
        directory: str | None = None,
        force: bool = False,
    ) -> ServiceResult:
        """Scaffold ``<slug>-mode.md`` from the packaged template."""
        op = "new_mode"
        slug = normalize_slug(name)
        if not slug:
            return ServiceResult.failure(
                op, "INVALID_NAME", f"Mode name {name!r} has no usable characters"
            )
        try:
            mode_dir = self._workspace.resolve(directory or self._settings.modes.directory)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))

        path = mode_dir / f"{slug}-mode.md"
        if path.exists() and not force:
            return ServiceResult.failure(
                op, "ALREADY_EXISTS", f"Mode file already exists: {path}", path=str(path)
            )

        try:
            template = self._workspace.templates("modes").get_template(MODE_TEMPLATE)
            content = template.render(name=name.strip(), slug=slug)
        except TemplateError as exc:
            return ServiceResult.failure(op, "TEMPLATE_ERROR", str(exc))

        try:
            write_text_file(path, content)
        except OSError as exc:
            return ServiceResult.failure(
                op, "WRITE_FAILED", f"Could not write {path}: {exc}", path=str(path)
            )
        logger.info("Created mode file %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name.strip(), "slug": slug, "path": str(path)},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collect(
        self,
        mode_dir: Path,
        warnings: list[str],
    ) -> tuple[list[tuple[ModeDefinition, Path | None]], list[str]]:
        cfg = self._settings.modes
        files = find_mode_files(mode_dir, cfg.pattern)
        logger.debug("Found %d mode files in %s", len(files), mode_dir)

        parsed: list[tuple[ModeDefinition, Path | None]] = []
        skipped: list[str] = []
        for path in files:
            logger.debug("Processing %s", path.name)
            try:
                content = path.read_text(encoding="utf-8")
                mode = parse_mode_file(content, path.name, groups=cfg.groups, source=cfg.source)
            except (OSError, UnicodeDecodeError, ModeParseError) as exc:
                logger.debug("Skipping %s: %s", path.name, exc)
                warnings.append(f"Error parsing {path.name}: {exc}")
                skipped.append(path.name)
                continue
            parsed.append((mode, path))
        return parsed, skipped

    def _write(
        self,
        op: str,
        parsed: list[tuple[ModeDefinition, Path | None]],
        *,
        out_path: Path,
        fmt: str,
        dry_run: bool,
        warnings: list[str],
        extra: dict[str, Any],
    ) -> ServiceResult:
        ordered = sorted(parsed, key=lambda pair: mode_sort_key(pair[0]))
        modes = [mode for mode, _ in ordered]
        for slug in duplicate_slugs(modes):
            warnings.append(f"Duplicate mode slug: {slug}")

        try:
            rendered = render_roomodes([m.to_config() for m in modes], fmt)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_FORMAT", str(exc))

        if not dry_run:
            try:
                write_text_file(out_path, rendered)
            except OSError as exc:
                return ServiceResult.failure(
                    op, "WRITE_FAILED", f"Could not write {out_path}: {exc}", path=str(out_path)
                )
            logger.info("Wrote %d modes to %s", len(modes), out_path)

        data: dict[str, Any] = {
            "output": str(out_path),
            "format": fmt,
            "count": len(modes),
            "dry_run": dry_run,
            "modes": [self._summary(mode, path) for mode, path in ordered],
            **extra,
        }
        if dry_run:
            data["content"] = rendered
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @staticmethod
    def _summary(mode: ModeDefinition, path: Path | None) -> dict[str, Any]:
        item: dict[str, Any] = {"name": mode.name, "slug": mode.slug}
        if path is not None:
            item["file"] = path.name
        return item
