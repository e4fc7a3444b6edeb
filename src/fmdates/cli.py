"""Root CLI group for fmdates with global flags and command registration."""

from __future__ import annotations

import click

from fmdates import __version__
from fmdates.commands import register_commands
from fmdates.commands._context import AppContext
from fmdates.config.settings import FmSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="fmdates")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Only print paths of changed files.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Files processed in parallel (1 = sequential).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    workers: int | None,
) -> None:
    """fmdates — keep front matter dates in step with git history.

    \b
    Rules applied to `date` and `updated` in +++ TOML front matter:
      - `date` is set once (last commit date, or today if never committed)
        and then left alone.
      - `updated` is stamped with today whenever git shows an edit newer
        than what the front matter claims, and removed when it would equal
        `date` on the day of creation.
      - Non-date values, future dates, and `updated` earlier than `date`
        are ignored with a warning.
    """
    ctx.ensure_object(dict)
    settings = FmSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        workers=workers,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
