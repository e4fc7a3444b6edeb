"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from fmdates.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from fmdates.services.result import ServiceResult

_CHANGED_STATUSES = frozenset({"updated", "would_update"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _status_line(console, result)
    if "files" in result.data:
        _render_files(result, console, verbose=verbose)
    if not result.ok:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one changed path per line."""
    files: list[dict[str, Any]] = result.data.get("files", [])
    lines = [f["path"] for f in files if f.get("status") in _CHANGED_STATUSES]
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        lines.append(f"ERROR: {result.op} — {msg}")
    return "\n".join(lines)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="fm.ok")
    op = Text(f"  {result.op}", style="fm.op")
    console.print(label, op, end="")
    console.print()


def _file_table(files: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="fm.path")
    table.add_column("Status")
    table.add_column("Date", style="fm.date", no_wrap=True)
    table.add_column("Updated", style="fm.date", no_wrap=True)

    for f in files:
        status = str(f.get("status", ""))
        table.add_row(
            Text(str(f.get("path", ""))),
            Text(status, style=style_for_status(status)),
            str(f.get("date") or ""),
            str(f.get("updated") or ""),
        )
    return table


def _render_files(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render per-file outcomes. Unchanged files only appear with --verbose."""
    d = result.data
    files: list[dict[str, Any]] = d.get("files", [])
    shown = files if verbose else [f for f in files if f.get("status") != "unchanged"]
    if shown:
        console.print(_file_table(shown))

    for f in files:
        if f.get("error"):
            console.print(Text.assemble("  ", ("error", "fm.error"), f" {f['path']}: {f['error']}"))

    summary = (
        f"{d.get('count', len(files))} files: "
        f"{d.get('updated', 0)} updated, "
        f"{d.get('would_update', 0)} stale, "
        f"{d.get('unchanged', 0)} unchanged, "
        f"{d.get('errors', 0)} errors"
    )
    if d.get("dry_run"):
        summary += " (dry run)"
    console.print(f"\n{summary}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="fm.error")
    op = Text(f"  {result.op}", style="fm.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
