"""Tests for content discovery and record I/O."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from fmdates.domain.frontmatter import FrontMatterError, NoChangeError
from fmdates.domain.reconcile import Reconciliation
from fmdates.infrastructure.filesystem import (
    is_eligible,
    read_record,
    walk_content,
    write_record,
)


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestIsEligible:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("post.md", True),
            ("_index.md", False),
            ("index.md", True),
            ("notes.txt", False),
            ("post.md.bak", False),
            ("README", False),
        ],
    )
    def test_defaults(self, name: str, expected: bool) -> None:
        assert is_eligible(Path("content") / name) is expected

    def test_custom_extension_and_index(self) -> None:
        assert is_eligible(Path("a.markdown"), extension="markdown")
        assert is_eligible(Path("a.markdown"), extension=".markdown")
        assert not is_eligible(Path("index.md"), index_filename="index.md")


class TestWalkContent:
    def test_finds_nested_files_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path / "b.md")
        _touch(tmp_path / "a" / "z.md")
        _touch(tmp_path / "a" / "deep" / "deeper" / "x.md")
        _touch(tmp_path / "a" / "_index.md")
        _touch(tmp_path / "a" / "image.png")

        found = list(walk_content([tmp_path]))

        assert found == [
            tmp_path / "a" / "deep" / "deeper" / "x.md",
            tmp_path / "a" / "z.md",
            tmp_path / "b.md",
        ]

    def test_skips_configured_directories(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".git" / "notes.md")
        _touch(tmp_path / "drafts" / "wip.md")
        _touch(tmp_path / "post.md")

        found = list(walk_content([tmp_path], skip_dirs=[".git", "drafts"]))

        assert found == [tmp_path / "post.md"]

    def test_file_root_is_yielded_when_eligible(self, tmp_path: Path) -> None:
        post = _touch(tmp_path / "post.md")
        index = _touch(tmp_path / "_index.md")
        assert list(walk_content([post])) == [post]
        assert list(walk_content([index])) == []

    def test_multiple_roots(self, tmp_path: Path) -> None:
        a = _touch(tmp_path / "one" / "a.md")
        b = _touch(tmp_path / "two" / "b.md")
        assert list(walk_content([tmp_path / "one", tmp_path / "two"])) == [a, b]

    def test_unreadable_directory_aborts(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _touch(tmp_path / "locked" / "a.md")
        original = Path.iterdir

        def fake_iterdir(self: Path):  # type: ignore[no-untyped-def]
            if self.name == "locked":
                raise PermissionError(13, "Permission denied")
            return original(self)

        monkeypatch.setattr(Path, "iterdir", fake_iterdir)
        with pytest.raises(OSError, match="Failed to read directory"):
            list(walk_content([tmp_path]))


class TestReadRecord:
    def test_reads_and_splits(self, tmp_path: Path) -> None:
        path = _touch(tmp_path / "post.md", "+++\ndate = 2021-01-01\n+++\n\nBody\n")
        record = read_record(path)
        assert record.path == path
        assert record.content == "Body\n"
        assert record.existing_dates() == (date(2021, 1, 1), None)

    def test_missing_front_matter(self, tmp_path: Path) -> None:
        path = _touch(tmp_path / "post.md", "No front matter here\n")
        with pytest.raises(FrontMatterError):
            read_record(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_record(tmp_path / "absent.md")


class TestWriteRecord:
    def test_writes_changed_record(self, tmp_path: Path) -> None:
        path = _touch(tmp_path / "post.md", '+++\ntitle = "Hi"\n+++\n\nBody\n')
        record = read_record(path).with_dates(
            Reconciliation(date=date(2024, 3, 15), updated=None, changed=True)
        )
        write_record(record)
        assert path.read_text(encoding="utf-8") == (
            '+++\ntitle = "Hi"\ndate = 2024-03-15\n+++\n\nBody\n'
        )

    def test_preserves_crlf(self, tmp_path: Path) -> None:
        path = tmp_path / "post.md"
        path.write_bytes(b'+++\r\ntitle = "Hi"\r\n+++\r\n\r\nBody\r\n')
        record = read_record(path).with_dates(
            Reconciliation(date=date(2024, 3, 15), updated=None, changed=True)
        )
        write_record(record)
        data = path.read_bytes()
        assert b'title = "Hi"\r\n' in data
        assert b"+++\r\n\r\nBody\r\n" in data
        assert data.endswith(b"Body\r\n")

    def test_refuses_unchanged_record(self, tmp_path: Path) -> None:
        text = "+++\ndate = 2021-01-01\n+++\n\nBody\n"
        path = _touch(tmp_path / "post.md", text)
        with pytest.raises(NoChangeError, match="Write aborted"):
            write_record(read_record(path))
        assert path.read_text(encoding="utf-8") == text
