"""TOML front matter records — split, edit dates, re-render.

A content file looks like::

    +++
    title = "Hello"
    date = 2021-05-01
    +++

    Body text.

The block between the ``+++`` lines is kept as raw text and edited with
tomlkit, which round-trips comments, key order and whitespace. Only the
``date`` and ``updated`` keys are ever touched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Self

import tomlkit
from tomlkit.exceptions import ParseError
from tomlkit.toml_document import TOMLDocument

from fmdates.domain.dates import equal
from fmdates.domain.reconcile import DATE_KEY, UPDATED_KEY, Reconciliation

_DELIMITER = "+++"

# group 1: front matter (starts with the newline after the opening +++)
# group 2: content after the closing +++ and one optional blank line
_FRONT_MATTER_RE = re.compile(
    r"\A\s*\+\+\+(\r?\n.*?)^\+\+\+\s*(?:\Z|\r?\n(.*)\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatterError(ValueError):
    """The file has no ``+++`` block, or the block is not valid TOML."""


class NoChangeError(RuntimeError):
    """Rendering or writing was requested for an unchanged record."""


def split_front_matter(text: str) -> tuple[str, str]:
    """Split *text* into ``(front_matter, content)``.

    Raises:
        FrontMatterError: No opening/closing ``+++`` pair was found.
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        msg = "Failed to find front matter"
        raise FrontMatterError(msg)
    return match.group(1), match.group(2) or ""


def parse_document(front_matter: str) -> TOMLDocument:
    """Parse front matter text into a round-trip tomlkit document."""
    try:
        doc = tomlkit.parse(front_matter)
    except ParseError as exc:
        msg = f"Failed to parse TOML in front matter: {exc}"
        raise FrontMatterError(msg) from exc
    assert doc.as_string() == front_matter, "tomlkit round-trip mismatch"
    return doc


@dataclass(frozen=True)
class FrontMatterRecord:
    """One content file split into front matter and content.

    Records are immutable: :meth:`with_dates` returns a new record whose
    ``changed`` flag is set when the front matter was rewritten.
    """

    path: Path
    front_matter: str
    content: str
    changed: bool = False

    @classmethod
    def from_text(cls, path: Path, text: str) -> Self:
        """Build a record from raw file text, validating the TOML block."""
        front_matter, content = split_front_matter(text)
        parse_document(front_matter)
        return cls(path=path, front_matter=front_matter, content=content)

    def document(self) -> TOMLDocument:
        return parse_document(self.front_matter)

    def existing_dates(self) -> tuple[Any | None, Any | None]:
        """Current ``(date, updated)`` values, None for absent keys."""
        doc = self.document()
        return doc.get(DATE_KEY), doc.get(UPDATED_KEY)

    def with_dates(self, result: Reconciliation) -> FrontMatterRecord:
        """Apply a reconciliation. Unchanged results return ``self``."""
        if not result.changed:
            return self
        doc = self.document()
        _set_date(doc, DATE_KEY, result.date)
        if result.updated is None:
            if UPDATED_KEY in doc:
                del doc[UPDATED_KEY]
        else:
            _set_date(doc, UPDATED_KEY, result.updated)
        return replace(self, front_matter=doc.as_string(), changed=True)

    def render(self) -> str:
        """Serialize back to file text.

        Raises:
            NoChangeError: The record was never changed.
        """
        if not self.changed:
            msg = f"No change detected. Write aborted. Path: {self.path}"
            raise NoChangeError(msg)
        newline = "\r\n" if self.front_matter.startswith("\r\n") else "\n"
        parts = [_DELIMITER, self.front_matter, _DELIMITER, newline]
        if self.content:
            parts.append(newline)
        parts.append(self.content)
        return "".join(parts)


def _set_date(doc: TOMLDocument, key: str, value: Any) -> None:
    # Keep the stored item when it already holds this calendar date so a
    # time or offset written by the author survives.
    current = doc.get(key)
    if current is not None and equal(current, value):
        return
    doc[key] = value
