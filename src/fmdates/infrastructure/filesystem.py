"""Filesystem operations for content files.

Pure splitting/rendering lives in :mod:`fmdates.domain.frontmatter`
(correct dependency direction: infrastructure -> domain). This module
handles traversal, eligibility, and actual file I/O.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from pathlib import Path

from fmdates.domain.frontmatter import FrontMatterRecord, NoChangeError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def is_eligible(path: Path, *, extension: str = "md", index_filename: str = "_index.md") -> bool:
    """Whether *path* is a content file whose dates should be managed.

    Section index pages (``_index.md``) carry no authored dates.
    """
    return path.suffix == f".{extension.lstrip('.')}" and path.name != index_filename


def walk_content(
    roots: Iterable[Path],
    *,
    extension: str = "md",
    index_filename: str = "_index.md",
    skip_dirs: Iterable[str] = (".git",),
) -> Iterator[Path]:
    """Yield eligible content files under *roots*, depth first, sorted.

    A root that is a file is yielded if eligible. Directories named in
    *skip_dirs* are not descended.

    Raises:
        OSError: A directory could not be listed. This aborts traversal.
    """
    skipped = frozenset(skip_dirs)
    pending: deque[Path] = deque(roots)
    while pending:
        path = pending.popleft()
        if path.is_dir():
            if path.name in skipped:
                logger.debug("Skipped directory %s", path)
                continue
            try:
                children = sorted(path.iterdir())
            except OSError as exc:
                msg = f"Failed to read directory: {path}"
                raise OSError(exc.errno, msg) from exc
            pending.extendleft(reversed(children))
        elif is_eligible(path, extension=extension, index_filename=index_filename):
            yield path
        else:
            logger.debug("Skipped %s", path)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_record(path: Path) -> FrontMatterRecord:
    """Read a content file and split it into a record.

    Line endings are read untranslated so they survive a rewrite.
    """
    with path.open(encoding="utf-8", newline="") as fh:
        text = fh.read()
    return FrontMatterRecord.from_text(path, text)


def write_record(record: FrontMatterRecord) -> None:
    """Persist a changed record over its file.

    Raises:
        NoChangeError: The record is unchanged; a no-op write is a bug.
    """
    if not record.changed:
        msg = f"No change detected. Write aborted. Path: {record.path}"
        raise NoChangeError(msg)
    with record.path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(record.render())
