"""Markdown primitives — frontmatter, headings, sections, and pipe tables.

Everything here is pure text processing over ``str``. Fenced code blocks
(```` ``` ```` or ``~~~``) are opaque: headings and tables inside them are
never reported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from ruamel.yaml import YAML

_FRONTMATTER_DELIMITER = "---"

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)[ \t]*#*[ \t]*$")
_FENCE_RE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
_DELIMITER_CELL_RE = re.compile(r"^:?-+:?$")


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed load can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split YAML frontmatter from the markdown body.

    Expects ``---`` on the first line; the next ``---`` line closes the YAML
    block. Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. Without a complete
        delimiter pair, returns ``({}, content)`` unchanged.

    Raises:
        ruamel.yaml.YAMLError: The frontmatter block is not valid YAML.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    fm = _new_yaml().load(yaml_block) or {}
    if not isinstance(fm, dict):
        return {}, body
    return dict(fm), body


# ---------------------------------------------------------------------------
# Headings and sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    """An ATX heading (``#`` .. ``######``)."""

    level: int
    text: str
    line: int  # 1-based

    @property
    def anchor(self) -> str:
        return anchor_slug(self.text)


def anchor_slug(text: str) -> str:
    """GitHub-style heading anchor.

    Examples:
        >>> anchor_slug("Data Model & Schema")
        'data-model--schema'
        >>> anchor_slug("1. Overview")
        '1-overview'
    """
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\- ]", "", slug)
    return slug.replace(" ", "-")


def iter_unfenced_lines(text: str) -> list[tuple[int, str]]:
    """Return ``(line_number, line)`` pairs outside fenced code blocks."""
    result: list[tuple[int, str]] = []
    fence: str | None = None
    for number, line in enumerate(text.replace("\r\n", "\n").split("\n"), start=1):
        match = _FENCE_RE.match(line)
        if match:
            marker = match.group(1)
            if fence is None:
                fence = marker[0] * len(marker)
                continue
            if marker.startswith(fence):
                fence = None
                continue
        if fence is None:
            result.append((number, line))
    return result


def extract_headings(text: str) -> list[Heading]:
    """Return every ATX heading in document order."""
    headings: list[Heading] = []
    for number, line in iter_unfenced_lines(text):
        match = _HEADING_RE.match(line)
        if match:
            headings.append(Heading(len(match.group(1)), match.group(2).strip(), number))
    return headings


def first_title(text: str) -> str | None:
    """Text of the first level-1 heading, if any."""
    for heading in extract_headings(text):
        if heading.level == 1:
            return heading.text
    return None


def section_lines(text: str, heading: Heading) -> list[tuple[int, str]]:
    """Lines below *heading* up to the next heading of the same or higher rank."""
    lines: list[tuple[int, str]] = []
    for number, line in iter_unfenced_lines(text):
        if number <= heading.line:
            continue
        match = _HEADING_RE.match(line)
        if match and len(match.group(1)) <= heading.level:
            break
        lines.append((number, line))
    return lines


# ---------------------------------------------------------------------------
# Pipe tables
# ---------------------------------------------------------------------------


@dataclass
class Table:
    """A pipe table: header row, optional delimiter row, and body rows."""

    line: int
    header: list[str]
    delimiter: list[str] | None = None
    rows: list[tuple[int, list[str]]] = field(default_factory=list)


def split_row(line: str) -> list[str]:
    """Split a pipe-table row into trimmed cells.

    Leading and trailing pipes are optional; ``\\|`` is a literal pipe.
    """
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    cells = re.split(r"(?<!\\)\|", stripped)
    return [cell.strip() for cell in cells]


def is_delimiter_row(cells: list[str]) -> bool:
    return bool(cells) and all(_DELIMITER_CELL_RE.match(c.replace(" ", "")) for c in cells)


def extract_tables(text: str) -> list[Table]:
    """Group consecutive pipe rows (lines starting with ``|``) into tables."""
    tables: list[Table] = []
    current: Table | None = None
    for number, line in iter_unfenced_lines(text):
        if not line.lstrip().startswith("|"):
            current = None
            continue
        cells = split_row(line)
        if current is None:
            current = Table(line=number, header=cells)
            tables.append(current)
        elif current.delimiter is None and not current.rows and is_delimiter_row(cells):
            current.delimiter = cells
        else:
            current.rows.append((number, cells))
    return tables
