"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from rulekit.output.console import create_console, get_output, style_for_kind, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from rulekit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    if result.ok and result.op == "show_document":
        # Documents are handed out verbatim, never re-wrapped.
        return str(result.data.get("body", "")).rstrip("\n")

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "show_document":
        return str(result.data.get("body", "")).rstrip("\n")

    if result.op == "check":
        issues = result.data.get("issues", [])
        if not issues:
            return "OK: check"
        return "\n".join(
            f"{i['file']}:{i['line']}: {i['severity']} {i['rule']}" for i in issues
        )

    items = result.data.get("items") or result.data.get("modes")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    """The identifying value of a list item (slug for modes, name for documents)."""
    if isinstance(item, dict):
        for key in ("slug", "name"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="rk.ok")
    op = Text(f"  {result.op}", style="rk.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rk.key")
    if key == "slug":
        v = Text(str(value), style="rk.slug")
    elif key in ("path", "output", "config", "override_dir", "directory"):
        v = Text(str(value), style="rk.path")
    elif key == "title":
        v = Text(str(value), style="rk.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rk.error")
    op = Text(f"  {result.op}", style="rk.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.code == "NOT_FOUND" and err.detail.get("available"):
        console.print(Text(f"  available: {', '.join(err.detail['available'])}"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))

    if result.op == "check" and result.data.get("issues"):
        console.print(_issue_table(result.data["issues"]))


# ── Mode renderers ────────────────────────────────────────────────────


def _mode_table(modes: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Slug", style="rk.slug", no_wrap=True)
    table.add_column("Name", style="rk.title")
    table.add_column("File", style="rk.path")
    for mode in modes:
        table.add_row(
            Text(str(mode.get("slug", ""))),
            Text(str(mode.get("name", ""))),
            Text(str(mode.get("file", ""))),
        )
    return table


def _render_modes_written(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render generate_modes / stub_modes results."""
    d = result.data
    _status_line(console, result)
    _field(console, "output", d.get("output", ""))
    _field(console, "format", d.get("format", ""))
    _field(console, "count", d.get("count", 0))
    if d.get("dry_run"):
        _field(console, "dry_run", "nothing written")
    if d.get("skipped"):
        _field(console, "skipped", ", ".join(d["skipped"]))

    modes = d.get("modes", [])
    if modes:
        console.print()
        console.print(_mode_table(modes))

    if d.get("dry_run") and d.get("content"):
        console.print()
        console.print(d["content"].rstrip("\n"), markup=False, soft_wrap=True)
    if verbose:
        _render_meta(console, result)


def _render_mode_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No mode files found.", style="dim"))
        return
    console.print(_mode_table(items))
    if result.data.get("skipped"):
        console.print(Text(f"  skipped: {', '.join(result.data['skipped'])}"))


# ── Document renderers ────────────────────────────────────────────────


def _render_document_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No documents found.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="rk.slug", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Title", style="rk.title")
    if verbose:
        table.add_column("Source", style="dim")
        table.add_column("Summary")

    for item in items:
        kind = str(item.get("kind", ""))
        row = [
            Text(str(item.get("name", ""))),
            Text(kind, style=style_for_kind(kind)),
            Text(str(item.get("title", ""))),
        ]
        if verbose:
            row.extend([Text(str(item.get("source", ""))), Text(str(item.get("summary", "")))])
        table.add_row(*row)
    console.print(table)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "output", d.get("output", ""))
    _field(console, "count", d.get("count", 0))
    for path in d.get("written", []):
        console.print(Text.assemble("  ", ("+", "rk.ok"), f" {path}"), soft_wrap=True)
    for path in d.get("skipped", []):
        console.print(Text.assemble("  ", ("=", "rk.warning"), f" {path}"), soft_wrap=True)


# ── Check renderer ────────────────────────────────────────────────────


def _issue_table(issues: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("File", style="rk.path")
    table.add_column("Line", justify="right")
    table.add_column("Severity")
    table.add_column("Rule")
    table.add_column("Message")
    for issue in issues:
        severity = str(issue.get("severity", ""))
        table.add_row(
            Text(str(issue.get("file", ""))),
            Text(str(issue.get("line", ""))),
            Text(severity, style=style_for_severity(severity)),
            Text(str(issue.get("rule", ""))),
            Text(str(issue.get("message", ""))),
        )
    return table


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "files", len(d.get("files", [])))
    _field(console, "errors", d.get("error_count", 0))
    _field(console, "warnings", d.get("warning_count", 0))

    issues = d.get("issues", [])
    if issues:
        console.print()
        console.print(_issue_table(issues))
    if verbose and d.get("files"):
        console.print()
        for name in d["files"]:
            console.print(Text(f"  {name}", style="rk.path"), soft_wrap=True)


# ── Generic renderers ─────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render new_mode / init results."""
    _status_line(console, result)
    for key in ("name", "slug", "path", "config", "override_dir"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    # Modes
    "generate_modes": _render_modes_written,
    "stub_modes": _render_modes_written,
    "list_modes": _render_mode_list,
    "new_mode": _render_mutation,
    # Documents
    "list_documents": _render_document_list,
    "export_documents": _render_export,
    # Check
    "check": _render_check,
    # Init
    "init": _render_mutation,
}
