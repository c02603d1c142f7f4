"""Rich Console factory and theme for rulekit output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RULEKIT_THEME = Theme(
    {
        "rk.ok": "bold green",
        "rk.error": "bold red",
        "rk.warning": "bold yellow",
        "rk.op": "bold cyan",
        "rk.key": "dim",
        "rk.slug": "bold blue",
        "rk.path": "dim",
        "rk.title": "bold",
        "rk.kind.template": "green",
        "rk.kind.guideline": "blue",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "rk.error",
    "warning": "rk.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=RULEKIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    return f"rk.kind.{kind}" if kind in ("template", "guideline") else ""


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
