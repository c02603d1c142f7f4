"""LintService — structural checks over markdown documents.

Follows the linter pattern: issues are data, not failures. A run that
finds problems still returns ``ok=True`` unless *strict* is requested.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rulekit.domain.lint import SEVERITY_ERROR, SEVERITY_WARNING, filter_by_severity, lint_document
from rulekit.infrastructure.filesystem import find_markdown_files
from rulekit.services.base import BaseService
from rulekit.services.documents import DocumentService
from rulekit.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class LintService(BaseService):
    """Lint explicit files, or every catalog document by default."""

    def check(
        self,
        paths: list[str] | None = None,
        *,
        min_severity: str | None = None,
        strict: bool = False,
    ) -> ServiceResult:
        op = "check"
        threshold = min_severity or self._settings.check.min_severity
        warnings: list[str] = []

        try:
            sources = self._sources(paths, warnings)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))
        except FileNotFoundError as exc:
            return ServiceResult.failure(
                op, "FILE_NOT_FOUND", f"No such file or directory: {exc}", path=str(exc)
            )

        files: list[str] = []
        issues: list[dict[str, Any]] = []
        for label, text in sources:
            files.append(label)
            found = filter_by_severity(lint_document(text), threshold)
            logger.debug("Linted %s: %d issue(s)", label, len(found))
            issues.extend({"file": label, **issue.to_dict()} for issue in found)

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        warning_count = sum(1 for i in issues if i["severity"] == SEVERITY_WARNING)
        data = {
            "files": files,
            "issues": issues,
            "count": len(issues),
            "error_count": error_count,
            "warning_count": warning_count,
            "healthy": error_count == 0,
        }
        if strict and error_count:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code="LINT_ERRORS", message=f"{error_count} structural error(s) found"
                ),
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _sources(self, paths: list[str] | None, warnings: list[str]) -> list[tuple[str, str]]:
        """``(label, text)`` pairs to lint."""
        if not paths:
            docs = DocumentService(self._workspace).catalog(warnings)
            return [(f"{d.name}.md", d.body) for d in docs]

        sources: list[tuple[str, str]] = []
        resolved = [self._workspace.resolve(p) for p in paths]
        for path in find_markdown_files(resolved):
            try:
                sources.append((self._label(path), path.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError) as exc:
                warnings.append(f"Could not read {path}: {exc}")
        return sources

    def _label(self, path: Path) -> str:
        """Path relative to the workspace root when it lies inside it."""
        try:
            return str(path.relative_to(self._workspace.root))
        except ValueError:
            return str(path)
