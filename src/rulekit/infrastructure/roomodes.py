"""Rendering of the ``.roomodes`` custom-modes configuration file."""

from __future__ import annotations

import json
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.scalarstring import LiteralScalarString

ROOT_KEY = "customModes"


def _yaml_friendly(value: Any) -> Any:
    """Multi-line strings become literal blocks so prose stays readable."""
    if isinstance(value, str) and "\n" in value:
        return LiteralScalarString(value)
    if isinstance(value, dict):
        return {k: _yaml_friendly(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_yaml_friendly(v) for v in value]
    return value


def render_roomodes(modes: list[dict[str, Any]], fmt: str = "json") -> str:
    """Render ``{"customModes": modes}`` as JSON (2-space indent) or YAML.

    Raises:
        ValueError: Unknown *fmt*.
    """
    payload = {ROOT_KEY: modes}
    if fmt == "json":
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        y = YAML()
        y.default_flow_style = False
        y.width = 4096
        buf = StringIO()
        y.dump(_yaml_friendly(payload), buf)
        return buf.getvalue()
    msg = f"Unknown output format: {fmt!r}"
    raise ValueError(msg)
