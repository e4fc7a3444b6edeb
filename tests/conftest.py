"""Shared pytest fixtures for fmdates tests."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from fmdates.config.settings import FmSettings


@pytest.fixture(autouse=True)
def _no_ambient_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FMDATES_* environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("FMDATES_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


def _git(cwd: Path, *args: str, env: dict[str, str] | None = None) -> None:
    subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        check=True,
        env={**os.environ, **(env or {})},
    )


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Temporary git repository with an empty ``content/`` directory."""
    root = tmp_path / "site"
    (root / "content").mkdir(parents=True)
    _git(root, "init")
    _git(root, "config", "user.email", "test@test.com")
    _git(root, "config", "user.name", "Test")
    _git(root, "config", "commit.gpgsign", "false")
    return root


@pytest.fixture
def write_page(site: Path) -> Callable[..., Path]:
    """Write a content file under ``content/`` and return its path."""

    def _write(name: str, text: str) -> Path:
        path = site / "content" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def commit(site: Path) -> Callable[..., None]:
    """Commit everything in the repo with a fixed commit date (YYYY-MM-DD)."""

    def _commit(day: str, message: str = "edit") -> None:
        stamp = f"{day}T12:00:00+0000"
        _git(site, "add", "-A")
        _git(
            site,
            "commit",
            "-m",
            message,
            env={"GIT_AUTHOR_DATE": stamp, "GIT_COMMITTER_DATE": stamp},
        )

    return _commit


@pytest.fixture
def settings(site: Path) -> FmSettings:
    """Settings rooted at the temporary site, processed sequentially."""
    return FmSettings.from_cli(search_from=site, workers=1)


@pytest.fixture
def _in_site(site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site so the CLI resolves paths against it.

    Use via ``@pytest.mark.usefixtures("_in_site")`` on command test classes.
    """
    monkeypatch.chdir(site)
