"""Document catalog entries.

Packaged documents carry a short YAML frontmatter block with catalog
metadata (``kind``, ``summary``). The body below it is the document itself
and is always handed out verbatim.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from rulekit.domain.markdown import first_title, parse_frontmatter

DocumentKind = Literal["template", "guideline"]
DocumentSource = Literal["package", "override"]

DOCUMENT_SUFFIX = ".md"


class Document(BaseModel):
    """A catalog document with its body."""

    model_config = {"frozen": True}

    name: str
    title: str
    kind: DocumentKind = "guideline"
    summary: str = ""
    source: DocumentSource = "package"
    body: str

    def info(self) -> dict[str, str]:
        """Catalog row without the body."""
        return self.model_dump(exclude={"body"})


def document_name(filename: str) -> str:
    """``security-guidelines.md`` -> ``security-guidelines``."""
    if filename.endswith(DOCUMENT_SUFFIX):
        return filename[: -len(DOCUMENT_SUFFIX)]
    return filename


def load_document(name: str, raw: str, *, source: DocumentSource = "package") -> Document:
    """Build a :class:`Document` from raw file text.

    The title is the first level-1 heading, falling back to *name*.
    """
    frontmatter, body = parse_frontmatter(raw)
    kind = frontmatter.get("kind", "guideline")
    summary = str(frontmatter.get("summary") or "").strip()
    return Document(
        name=name,
        title=first_title(body) or name,
        kind=kind,
        summary=summary,
        source=source,
        body=body,
    )
