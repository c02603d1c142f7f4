"""Mode definitions — parsing ``*-mode.md`` files into ``.roomodes`` entries.

A mode file looks like::

    ---
    groups: [read, edit]        # optional overrides
    ---
    # Code Analyst Mode

    ## Role Definition
    You are ...

    ## Custom Instructions
    1. Always ...

The ``# <Name> Mode`` heading names the mode. The role definition is the
``## Role Definition`` section when one exists, otherwise everything above
``## Custom Instructions``. Custom instructions are everything below that
heading.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel
from ruamel.yaml.error import YAMLError

from rulekit.domain.markdown import parse_frontmatter

DEFAULT_MODE_GROUPS: tuple[str, ...] = ("read", "edit", "browser", "command", "mcp")

_NAME_HEADING_RE = re.compile(r"^# ([^\n]+) Mode\s*", re.MULTILINE)
_ROLE_SECTION_RE = re.compile(
    r"^## Role Definition[ \t]*\n(.*?)(?=^## |\Z)", re.MULTILINE | re.DOTALL
)
_CUSTOM_HEADING_RE = re.compile(r"^## Custom Instructions[ \t]*$", re.MULTILINE)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

# Frontmatter keys a mode file may use to override derived values.
_OVERRIDE_KEYS: dict[str, str] = {
    "slug": "slug",
    "groups": "groups",
    "source": "source",
    "whenToUse": "when_to_use",
    "when_to_use": "when_to_use",
}


class ModeParseError(ValueError):
    """A mode file could not be turned into a :class:`ModeDefinition`."""


class ModeDefinition(BaseModel):
    """One entry of the ``customModes`` list.

    Serialized with camelCase keys; unset optional fields are omitted.
    ``groups`` entries are either a group name or Roo's restricted form
    ``["edit", {"fileRegex": ..., "description": ...}]``.
    """

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    slug: str
    name: str
    role_definition: str
    when_to_use: str | None = None
    groups: list[str | list[Any]] = Field(default_factory=lambda: list(DEFAULT_MODE_GROUPS))
    source: str = "project"
    custom_instructions: str | None = None

    def to_config(self) -> dict[str, Any]:
        """Return the ``.roomodes`` representation of this mode."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def normalize_slug(name: str) -> str:
    """Lowercase *name* and collapse every non-alphanumeric run into one dash.

    Examples:
        >>> normalize_slug("Code Analyst")
        'code-analyst'
        >>> normalize_slug("  Q&A  Bot!")
        'q-a-bot'
    """
    return _NON_SLUG_RE.sub("-", name.lower()).strip("-")


def split_mode_body(body: str) -> tuple[str, str | None]:
    """Split the text under the name heading into role and custom instructions."""
    custom: str | None = None
    custom_match = _CUSTOM_HEADING_RE.search(body)
    if custom_match:
        custom = body[custom_match.end() :].strip() or None

    role_match = _ROLE_SECTION_RE.search(body)
    if role_match:
        role = role_match.group(1).strip()
    elif custom_match:
        role = body[: custom_match.start()].strip()
    else:
        role = body.strip()
    return role, custom


def parse_mode_file(
    content: str,
    filename: str,
    *,
    groups: list[str] | None = None,
    source: str | None = None,
) -> ModeDefinition:
    """Parse one mode markdown file.

    *groups* and *source* are the configured defaults; frontmatter keys in
    the file take precedence over them.

    Raises:
        ModeParseError: No ``# <Name> Mode`` heading, invalid frontmatter,
            or frontmatter overrides of the wrong type.
    """
    text = content.replace("\r\n", "\n")
    try:
        frontmatter, body = parse_frontmatter(text)
    except YAMLError as exc:
        msg = f"Invalid frontmatter in {filename}: {exc}"
        raise ModeParseError(msg) from exc

    match = _NAME_HEADING_RE.search(body)
    if match is None:
        msg = "Could not find mode name in markdown file"
        raise ModeParseError(msg)

    name = match.group(1).strip()
    remainder = (body[: match.start()] + body[match.end() :]).strip()
    role, custom = split_mode_body(remainder)

    fields: dict[str, Any] = {
        "slug": normalize_slug(name),
        "name": name,
        "role_definition": role,
        "custom_instructions": custom,
    }
    if groups is not None:
        fields["groups"] = list(groups)
    if source is not None:
        fields["source"] = source
    for key, field_name in _OVERRIDE_KEYS.items():
        if key in frontmatter and frontmatter[key] is not None:
            fields[field_name] = frontmatter[key]

    try:
        return ModeDefinition(**fields)
    except ValidationError as exc:
        msg = f"Invalid mode fields in {filename}: {exc.error_count()} error(s)"
        raise ModeParseError(msg) from exc


def stub_mode(
    name: str,
    *,
    groups: list[str] | None = None,
    source: str | None = None,
) -> ModeDefinition:
    """Build a placeholder mode whose text fields are all its slug."""
    slug = normalize_slug(name)
    fields: dict[str, Any] = {
        "slug": slug,
        "name": name,
        "role_definition": slug,
        "when_to_use": slug,
        "custom_instructions": slug,
    }
    if groups is not None:
        fields["groups"] = list(groups)
    if source is not None:
        fields["source"] = source
    return ModeDefinition(**fields)


def mode_sort_key(mode: ModeDefinition) -> str:
    """Alphabetical by name, case-insensitive."""
    return mode.name.casefold()


def duplicate_slugs(modes: list[ModeDefinition]) -> list[str]:
    """Slugs used by more than one mode, in first-seen order."""
    seen: set[str] = set()
    dupes: list[str] = []
    for mode in modes:
        if mode.slug in seen and mode.slug not in dupes:
            dupes.append(mode.slug)
        seen.add(mode.slug)
    return dupes
