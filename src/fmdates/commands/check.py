"""Command: fail when any content file has stale dates (CI mode)."""

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
  fmdates check
  fmdates check content/
  fmdates -q check content/""",
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(path_type=Path),
)
@click.pass_obj
def check(app: AppContext, paths: tuple[Path, ...]) -> None:
    """Report files whose dates need rewriting. Never writes."""
    from fmdates.services.update import UpdateService

    targets = list(paths) or [Path(".")]
    app.emit(UpdateService(app.settings).check(targets))
