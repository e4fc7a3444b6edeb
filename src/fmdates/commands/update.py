"""Command: rewrite stale date/updated front matter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from fmdates.commands._base import FmCommand

if TYPE_CHECKING:
    from fmdates.commands._context import AppContext


@click.command(
    cls=FmCommand,
    examples="""\
  fmdates update
  fmdates update content/
  fmdates update content/blog/first-post.md
  fmdates update --dry-run content/
  fmdates --json update content/""",
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(path_type=Path),
)
@click.option("--dry-run", is_flag=True, help="Report what would change without writing.")
@click.pass_obj
def update(app: AppContext, paths: tuple[Path, ...], dry_run: bool) -> None:
    """Reconcile date/updated in every content file under PATHS (default: .)."""
    from fmdates.services.update import UpdateService

    targets = list(paths) or [Path(".")]
    app.emit(UpdateService(app.settings).update(targets, dry_run=dry_run))
