"""Git edit-date lookup.

One ``git log`` subprocess per file. A failed query is fatal for that
file; no edit date is guessed.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    """The git query for a file failed or produced unusable output."""


def _run_git(path: Path, *args: str, executable: str = "git") -> subprocess.CompletedProcess[str]:
    """Run git in the directory holding *path*. Never raises on exit status."""
    return subprocess.run(
        [executable, *args],
        cwd=path.parent,
        capture_output=True,
        text=True,
        check=False,
    )


def _has_commits(path: Path, executable: str) -> bool:
    """False only when the repository holding *path* has an unborn HEAD.

    ``rev-parse --verify -q`` exits 1 silently for a missing ref. Any other
    failure (not a repository, broken install) counts as True so that the
    caller reports it.
    """
    result = _run_git(path, "rev-parse", "--verify", "-q", "HEAD", executable=executable)
    return not (result.returncode == 1 and not result.stderr)


def last_edit_date(path: Path, *, executable: str = "git") -> date | None:
    """Date of the most recent commit touching *path*.

    Returns None when the file has never been committed, including in a
    repository with no commits yet.

    Raises:
        GitError: git is missing, exited non-zero, wrote to stderr, or
            printed something that is not a ``YYYY-MM-DD`` date.
    """
    try:
        result = _run_git(path, "log", "-1", "--format=%cs", "--", path.name, executable=executable)
        if result.returncode != 0 and not _has_commits(path, executable):
            logger.debug("No commits yet - %s", path)
            return None
    except OSError as exc:
        msg = f"Failed to execute git command: {exc}"
        raise GitError(msg) from exc

    if result.returncode != 0 or result.stderr:
        msg = (
            f"Running git failed. status: {result.returncode} "
            f"stdout: {result.stdout!r}, stderr: {result.stderr!r}"
        )
        raise GitError(msg)

    stdout = result.stdout.strip()
    logger.debug("Git date: %r - %s", stdout, path)
    if not stdout:
        return None
    try:
        return date.fromisoformat(stdout[:10])
    except ValueError as exc:
        msg = f"Failed to parse git date {stdout!r}"
        raise GitError(msg) from exc
