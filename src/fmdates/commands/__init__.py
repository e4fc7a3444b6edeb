"""Subcommand modules for fmdates.

Provides register_commands() which uses deferred imports to keep
``fmdates --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from fmdates.commands.check import check
    from fmdates.commands.update import update

    cli.add_command(update)
    cli.add_command(check)
