"""Structural lint rules for markdown documents.

The rules cover layout only: table-of-contents consistency, pipe-table
shape, and heading hierarchy. They never inspect what a section says.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

from rulekit.domain.markdown import (
    Heading,
    anchor_slug,
    extract_headings,
    extract_tables,
    section_lines,
)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

SEVERITY_RANK: dict[str, int] = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

RULE_TOC_MISSING = "toc-missing-heading"
RULE_TOC_DUPLICATE = "toc-duplicate-heading"
RULE_TABLE_DELIMITER = "table-missing-delimiter"
RULE_TABLE_COLUMNS = "table-column-mismatch"
RULE_HEADING_SKIP = "heading-level-skip"
RULE_MULTIPLE_H1 = "multiple-h1"

TOC_TITLES = frozenset({"table of contents", "contents"})

_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(.+?)\s*$")
_LINK_RE = re.compile(r"^\[(?P<text>[^\]]+)\]\((?P<target>[^)]*)\)")
_NUMBER_PREFIX_RE = re.compile(r"^\d+(?:\.\d+)*\.?\s+")


@dataclass(frozen=True)
class LintIssue:
    """A single structural problem found in a document."""

    rule: str
    severity: str
    line: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TocEntry:
    text: str
    anchor: str | None
    line: int


def _strip_number(text: str) -> str:
    return _NUMBER_PREFIX_RE.sub("", text).strip()


def find_toc(headings: list[Heading]) -> Heading | None:
    """The first heading titled "Table of Contents" or "Contents"."""
    for heading in headings:
        if heading.text.strip().casefold() in TOC_TITLES:
            return heading
    return None


def toc_entries(text: str, toc: Heading) -> list[TocEntry]:
    """List items directly under the TOC heading."""
    entries: list[TocEntry] = []
    for number, line in section_lines(text, toc):
        item = _LIST_ITEM_RE.match(line)
        if item is None:
            continue
        raw = item.group(1)
        link = _LINK_RE.match(raw)
        if link:
            target = link.group("target").strip()
            anchor = target[1:] if target.startswith("#") else None
            entries.append(TocEntry(link.group("text").strip(), anchor, number))
        else:
            entries.append(TocEntry(raw.strip(), None, number))
    return entries


def _matches(entry: TocEntry, heading: Heading) -> bool:
    if entry.anchor is not None:
        return heading.anchor == entry.anchor.lower()
    wanted = _strip_number(entry.text).casefold()
    return _strip_number(heading.text).casefold() == wanted or heading.anchor == anchor_slug(
        entry.text
    )


def check_toc(text: str, headings: list[Heading]) -> list[LintIssue]:
    """Every TOC entry must match exactly one heading."""
    toc = find_toc(headings)
    if toc is None:
        return []
    candidates = [h for h in headings if h is not toc]
    issues: list[LintIssue] = []
    for entry in toc_entries(text, toc):
        hits = sum(1 for h in candidates if _matches(entry, h))
        if hits == 0:
            issues.append(
                LintIssue(
                    RULE_TOC_MISSING,
                    SEVERITY_ERROR,
                    entry.line,
                    f"Table of contents entry {entry.text!r} has no matching heading",
                )
            )
        elif hits > 1:
            issues.append(
                LintIssue(
                    RULE_TOC_DUPLICATE,
                    SEVERITY_ERROR,
                    entry.line,
                    f"Table of contents entry {entry.text!r} matches {hits} headings",
                )
            )
    return issues


def check_tables(text: str) -> list[LintIssue]:
    """Header, delimiter, and body rows must agree on column count."""
    issues: list[LintIssue] = []
    for table in extract_tables(text):
        width = len(table.header)
        if table.delimiter is None:
            issues.append(
                LintIssue(
                    RULE_TABLE_DELIMITER,
                    SEVERITY_ERROR,
                    table.line,
                    "Table header is not followed by a delimiter row",
                )
            )
        elif len(table.delimiter) != width:
            issues.append(
                LintIssue(
                    RULE_TABLE_COLUMNS,
                    SEVERITY_ERROR,
                    table.line + 1,
                    f"Delimiter row has {len(table.delimiter)} columns, header has {width}",
                )
            )
        for number, cells in table.rows:
            if len(cells) != width:
                issues.append(
                    LintIssue(
                        RULE_TABLE_COLUMNS,
                        SEVERITY_ERROR,
                        number,
                        f"Row has {len(cells)} columns, header has {width}",
                    )
                )
    return issues


def check_headings(headings: list[Heading]) -> list[LintIssue]:
    issues: list[LintIssue] = []
    h1_seen = False
    previous: Heading | None = None
    for heading in headings:
        if heading.level == 1:
            if h1_seen:
                issues.append(
                    LintIssue(
                        RULE_MULTIPLE_H1,
                        SEVERITY_WARNING,
                        heading.line,
                        f"Additional level-1 heading {heading.text!r}",
                    )
                )
            h1_seen = True
        if previous is not None and heading.level > previous.level + 1:
            issues.append(
                LintIssue(
                    RULE_HEADING_SKIP,
                    SEVERITY_WARNING,
                    heading.line,
                    f"Heading level jumps from {previous.level} to {heading.level}",
                )
            )
        previous = heading
    return issues


def lint_document(text: str) -> list[LintIssue]:
    """Run every rule over *text*; issues are sorted by line."""
    headings = extract_headings(text)
    issues = [
        *check_toc(text, headings),
        *check_tables(text),
        *check_headings(headings),
    ]
    return sorted(issues, key=lambda i: (i.line, i.rule))


def filter_by_severity(issues: list[LintIssue], min_severity: str) -> list[LintIssue]:
    threshold = SEVERITY_RANK.get(min_severity, 0)
    return [i for i in issues if SEVERITY_RANK.get(i.severity, 0) >= threshold]
