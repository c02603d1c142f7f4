"""Subcommand modules for rulekit.

Provides register_commands() which uses deferred imports to keep
``rulekit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from rulekit.commands.docs import docs
    from rulekit.commands.modes import modes

    cli.add_command(docs)
    cli.add_command(modes)

    # --- Standalone commands ---
    from rulekit.commands.check import check
    from rulekit.commands.init_cmd import init_cmd

    cli.add_command(check)
    cli.add_command(init_cmd)
