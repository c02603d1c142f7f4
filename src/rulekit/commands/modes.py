"""Command group: custom mode files and the .roomodes configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rulekit.commands._base import RkGroup

if TYPE_CHECKING:
    from rulekit.commands._context import AppContext

_MODES_EXAMPLES = """\
  rulekit modes generate
  rulekit modes generate --dir modes/ --format yaml --output .roomodes
  rulekit modes list --dir modes/
  rulekit modes new "Code Analyst" --dir modes/
  rulekit modes stub coder planner maestro"""

_FORMAT_CHOICE = click.Choice(["json", "yaml"])


@click.group(cls=RkGroup, examples=_MODES_EXAMPLES)
def modes() -> None:
    """Build a .roomodes configuration from *-mode.md files."""


@modes.command(
    examples="""\
  rulekit modes generate
  rulekit modes generate --dir modes/
  rulekit modes generate --format yaml --dry-run""",
)
@click.option("--dir", "directory", default=None, help="Directory holding *-mode.md files.")
@click.option("--output", "-o", default=None, help="Config file to write.")
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default=None, help="Output format.")
@click.option("--dry-run", is_flag=True, help="Render without writing.")
@click.pass_obj
def generate(
    app: AppContext,
    directory: str | None,
    output: str | None,
    fmt: str | None,
    dry_run: bool,
) -> None:
    """Parse mode files and write the .roomodes configuration."""
    from rulekit.services.modes import ModeService

    app.emit(
        ModeService(app.workspace).generate(
            directory=directory, output=output, fmt=fmt, dry_run=dry_run
        )
    )


@modes.command(
    examples="""\
  rulekit modes stub coder planner
  rulekit modes stub "code-analyst,prodigy" --format yaml""",
)
@click.argument("names", nargs=-1, required=True)
@click.option("--output", "-o", default=None, help="Config file to write.")
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default=None, help="Output format.")
@click.option("--dry-run", is_flag=True, help="Render without writing.")
@click.pass_obj
def stub(
    app: AppContext,
    names: tuple[str, ...],
    output: str | None,
    fmt: str | None,
    dry_run: bool,
) -> None:
    """Write placeholder modes from bare NAMES (comma-separated values allowed)."""
    from rulekit.services.modes import ModeService

    flat = [part for name in names for part in name.split(",")]
    app.emit(ModeService(app.workspace).stub(flat, output=output, fmt=fmt, dry_run=dry_run))


@modes.command(
    "list",
    examples="""\
  rulekit modes list
  rulekit -q modes list --dir modes/""",
)
@click.option("--dir", "directory", default=None, help="Directory holding *-mode.md files.")
@click.pass_obj
def list_cmd(app: AppContext, directory: str | None) -> None:
    """Show the modes that generate would write."""
    from rulekit.services.modes import ModeService

    app.emit(ModeService(app.workspace).list_modes(directory=directory))


@modes.command(
    examples="""\
  rulekit modes new "Code Analyst"
  rulekit modes new Planner --dir modes/ --force""",
)
@click.argument("name")
@click.option("--dir", "directory", default=None, help="Directory to create the file in.")
@click.option("--force", is_flag=True, help="Overwrite an existing mode file.")
@click.pass_obj
def new(app: AppContext, name: str, directory: str | None, force: bool) -> None:
    """Scaffold a new <slug>-mode.md file."""
    from rulekit.services.modes import ModeService

    app.emit(ModeService(app.workspace).new_mode(name, directory=directory, force=force))
