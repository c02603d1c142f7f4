"""Command: workspace initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rulekit.commands._base import RkCommand

if TYPE_CHECKING:
    from rulekit.commands._context import AppContext

_INIT_EXAMPLES = """\
  rulekit init
  rulekit init /path/to/project --modes-dir modes
  rulekit init . --format yaml --force"""


@click.command("init", cls=RkCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--modes-dir", default=".", help="Directory holding *-mode.md files.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help=".roomodes output format.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing rulekit.toml.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, modes_dir: str, fmt: str, force: bool) -> None:
    """Write a starter rulekit.toml."""
    from rulekit.services.init import InitService

    app.emit(
        InitService.init_workspace(
            Path(path).resolve(), modes_dir=modes_dir, fmt=fmt, force=force
        )
    )
