"""Command: structural lint of markdown documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rulekit.commands._base import RkCommand

if TYPE_CHECKING:
    from rulekit.commands._context import AppContext


@click.command(
    cls=RkCommand,
    examples="""\
  rulekit check
  rulekit check docs/
  rulekit check README.md docs/schema.md --errors-only
  rulekit check docs/ --strict""",
)
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default=None,
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--strict", is_flag=True, help="Exit with status 1 when errors are found.")
@click.pass_obj
def check(
    app: AppContext,
    paths: tuple[str, ...],
    min_severity: str | None,
    errors_only: bool,
    strict: bool,
) -> None:
    """Check table-of-contents, table, and heading structure.

    Lints PATHS (files or directories), or every available document when
    none are given.
    """
    from rulekit.services.lint import LintService

    threshold = "error" if errors_only else min_severity
    app.emit(LintService(app.workspace).check(list(paths), min_severity=threshold, strict=strict))
