"""Tests for update CLI command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from fmdates.cli import cli
from fmdates.services._helpers import local_today


def _payload(stream: str) -> dict:
    """Parse the JSON result from a stream that may also carry log lines."""
    return json.loads(stream[stream.index('{\n  "ok"') :])


@pytest.mark.usefixtures("_in_site")
class TestUpdateCommand:
    def test_update_default_path(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        path = write_page("post.md", '+++\ntitle = "Post"\n+++\n\nBody\n')
        result = cli_runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "update" in result.stdout
        assert f"date = {local_today().isoformat()}" in path.read_text(encoding="utf-8")

    def test_update_json_output(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        write_page("post.md", "+++\n+++\n")
        result = cli_runner.invoke(cli, ["--json", "update", "content"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "update"
        assert data["data"]["updated"] == 1
        assert data["data"]["files"][0]["path"] == str(Path("content") / "post.md")
        assert data["data"]["files"][0]["date"] == local_today().isoformat()

    def test_update_single_file(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        write_page("a.md", "+++\n+++\n")
        b = write_page("b.md", "+++\n+++\n")
        result = cli_runner.invoke(cli, ["--json", "update", "content/a.md"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["count"] == 1
        assert b.read_text(encoding="utf-8") == "+++\n+++\n"

    def test_dry_run(self, cli_runner: CliRunner, write_page: Callable[..., Path]) -> None:
        path = write_page("post.md", "+++\n+++\n")
        result = cli_runner.invoke(cli, ["update", "--dry-run", "content"])
        assert result.exit_code == 0
        assert "would_update" in result.stdout
        assert "(dry run)" in result.stdout
        assert path.read_text(encoding="utf-8") == "+++\n+++\n"

    def test_quiet_lists_changed_paths(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        write_page("post.md", "+++\n+++\n")
        result = cli_runner.invoke(cli, ["-q", "update", "content"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(Path("content") / "post.md")

    def test_warnings_go_to_stderr(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        write_page("post.md", '+++\ndate = "someday"\n+++\n')
        result = cli_runner.invoke(cli, ["-q", "update", "content"])
        assert result.exit_code == 0
        assert "WARNING:" in result.stderr
        assert "Non date value found for `date`" in result.stderr
        assert "WARNING:" not in result.stdout

    def test_file_error_exits_nonzero(
        self, cli_runner: CliRunner, write_page: Callable[..., Path]
    ) -> None:
        write_page("good.md", "+++\n+++\n")
        write_page("bad.md", "no front matter\n")
        result = cli_runner.invoke(cli, ["--json", "update", "content"])
        assert result.exit_code == 1
        assert result.stdout == ""
        data = _payload(result.stderr)
        assert data["ok"] is False
        assert data["error"]["code"] == "FILE_ERRORS"
        assert data["data"]["updated"] == 1

    def test_missing_path_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["update", "nowhere"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "nowhere" in result.stderr

    def test_workers_flag(self, cli_runner: CliRunner, write_page: Callable[..., Path]) -> None:
        for name in ("a.md", "b.md", "c.md"):
            write_page(name, "+++\n+++\n")
        result = cli_runner.invoke(cli, ["--json", "-w", "2", "update", "content"])
        assert result.exit_code == 0
        files = json.loads(result.stdout)["data"]["files"]
        assert [Path(f["path"]).name for f in files] == ["a.md", "b.md", "c.md"]

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["update", "--examples"])
        assert result.exit_code == 0
        assert "fmdates update --dry-run" in result.stdout
