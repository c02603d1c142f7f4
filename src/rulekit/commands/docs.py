"""Command group: the packaged documentation templates and guidelines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rulekit.commands._base import RkGroup

if TYPE_CHECKING:
    from rulekit.commands._context import AppContext

_DOCS_EXAMPLES = """\
  rulekit docs list
  rulekit docs show security-guidelines
  rulekit docs export --output docs/
  rulekit docs export database-documentation --output docs/ --force"""


@click.group(cls=RkGroup, examples=_DOCS_EXAMPLES)
def docs() -> None:
    """Browse and export documentation templates and guidelines."""


@docs.command(
    "list",
    examples="""\
  rulekit docs list
  rulekit docs list --kind template
  rulekit --json docs list""",
)
@click.option(
    "--kind",
    type=click.Choice(["template", "guideline"]),
    default=None,
    help="Only list documents of this kind.",
)
@click.pass_obj
def list_cmd(app: AppContext, kind: str | None) -> None:
    """List available documents."""
    from rulekit.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).list_documents(kind=kind))


@docs.command(
    examples="""\
  rulekit docs show web-app-ui-ux
  rulekit docs show api-service-requirements | pbcopy""",
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Print a document verbatim."""
    from rulekit.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).show(name))


@docs.command(
    examples="""\
  rulekit docs export --output docs/
  rulekit docs export security-guidelines web-app-ui-ux --output .guidelines/""",
)
@click.argument("names", nargs=-1)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(file_okay=False),
    help="Directory to write the documents into.",
)
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.pass_obj
def export(app: AppContext, names: tuple[str, ...], output: str, force: bool) -> None:
    """Copy documents into a directory (all of them when no NAMES are given)."""
    from rulekit.services.documents import DocumentService

    app.emit(DocumentService(app.workspace).export(list(names), output, force=force))
