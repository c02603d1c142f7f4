"""DocumentService — list, show, and export the packaged documents.

Documents are loaded as raw source through the ``documents`` template
environment, so a same-named file in the workspace override directory
shadows the packaged copy. They are never rendered.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from rulekit.domain.documents import DOCUMENT_SUFFIX, Document, document_name, load_document
from rulekit.infrastructure.filesystem import write_text_file
from rulekit.infrastructure.templates import read_source
from rulekit.services.base import BaseService
from rulekit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class DocumentService(BaseService):
    """Read-only access to the document catalog, plus export."""

    def catalog(self, warnings: list[str] | None = None) -> list[Document]:
        """Every available document, sorted by name.

        Documents that fail to load are skipped; a message is appended to
        *warnings* when given.
        """
        env = self._workspace.templates("documents")
        override_dir = self._workspace.override_dir
        names = sorted(
            n for n in set(env.list_templates()) if n.endswith(DOCUMENT_SUFFIX) and "/" not in n
        )
        documents: list[Document] = []
        for filename in names:
            source = "override" if (override_dir / filename).is_file() else "package"
            try:
                raw = read_source(env, filename)
                documents.append(load_document(document_name(filename), raw, source=source))
            except (OSError, UnicodeDecodeError, YAMLError, ValidationError) as exc:
                logger.debug("Skipping document %s: %s", filename, exc)
                if warnings is not None:
                    warnings.append(f"Could not load document {filename}: {exc}")
        return documents

    def get(self, name: str) -> Document | None:
        """Look up one document by name (``.md`` suffix optional)."""
        wanted = document_name(name.strip())
        for doc in self.catalog():
            if doc.name == wanted:
                return doc
        return None

    def list_documents(self, *, kind: str | None = None) -> ServiceResult:
        warnings: list[str] = []
        docs = self.catalog(warnings)
        if kind is not None:
            docs = [d for d in docs if d.kind == kind]
        items = [d.info() for d in docs]
        return ServiceResult(
            ok=True,
            op="list_documents",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    def show(self, name: str) -> ServiceResult:
        """Return one document's body verbatim."""
        op = "show_document"
        doc = self.get(name)
        if doc is None:
            return self._not_found(op, name)
        return ServiceResult(ok=True, op=op, data={**doc.info(), "body": doc.body})

    def export(
        self,
        names: list[str],
        output_dir: str,
        *,
        force: bool = False,
    ) -> ServiceResult:
        """Copy documents into *output_dir* as ``<name>.md``.

        With no *names*, every document is exported. Existing files are
        left alone unless *force*.
        """
        op = "export_documents"
        try:
            target = self._workspace.resolve(output_dir)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_PATH", str(exc))

        available = {d.name: d for d in self.catalog()}
        if names:
            wanted = [document_name(n.strip()) for n in names]
            missing = [n for n in wanted if n not in available]
            if missing:
                return self._not_found(op, ", ".join(missing))
            selected = [available[n] for n in dict.fromkeys(wanted)]
        else:
            selected = list(available.values())

        written: list[str] = []
        skipped: list[str] = []
        warnings: list[str] = []
        for doc in selected:
            path = target / f"{doc.name}{DOCUMENT_SUFFIX}"
            if path.exists() and not force:
                warnings.append(f"File exists, skipped: {path}")
                skipped.append(str(path))
                continue
            try:
                write_text_file(path, doc.body)
            except OSError as exc:
                return ServiceResult.failure(
                    op, "WRITE_FAILED", f"Could not write {path}: {exc}", path=str(path)
                )
            written.append(str(path))
            logger.debug("Exported %s to %s", doc.name, path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output": str(target),
                "written": written,
                "skipped": skipped,
                "count": len(written),
            },
            warnings=warnings,
        )

    def _not_found(self, op: str, name: str) -> ServiceResult:
        known = [d.name for d in self.catalog()]
        return ServiceResult.failure(
            op, "NOT_FOUND", f"No such document: {name}", available=known
        )
