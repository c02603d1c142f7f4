"""Tests for .roomodes rendering."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from ruamel.yaml import YAML

from rulekit.infrastructure.roomodes import render_roomodes

MODES = [
    {
        "slug": "coder",
        "name": "Coder",
        "roleDefinition": "You write code.\nCarefully.",
        "groups": ["read", "edit"],
        "source": "project",
    }
]


class TestRenderJson:
    def test_structure_and_indent(self) -> None:
        text = render_roomodes(MODES, "json")
        assert text.endswith("}\n")
        assert text.startswith('{\n  "customModes": [')
        assert json.loads(text) == {"customModes": MODES}

    def test_empty(self) -> None:
        assert json.loads(render_roomodes([], "json")) == {"customModes": []}

    def test_non_ascii_kept(self) -> None:
        text = render_roomodes([{"slug": "x", "name": "Café"}], "json")
        assert "Café" in text


class TestRenderYaml:
    def test_round_trips(self) -> None:
        text = render_roomodes(MODES, "yaml")
        assert text.startswith("customModes:")
        loaded = YAML(typ="safe").load(StringIO(text))
        assert loaded == {"customModes": MODES}

    def test_multiline_strings_use_literal_blocks(self) -> None:
        text = render_roomodes(MODES, "yaml")
        assert "roleDefinition: |" in text


def test_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown output format"):
        render_roomodes(MODES, "toml")
