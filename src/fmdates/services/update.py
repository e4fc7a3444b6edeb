"""UpdateService — reconcile front matter dates across a content tree.

One task per eligible file: read and split the file, ask git for the
last edit date, reconcile, and write back only when something changed.

INVARIANT: A failure in one file never stops its siblings. Only a
directory that cannot be listed aborts the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, Field

from fmdates.domain.frontmatter import FrontMatterError
from fmdates.domain.reconcile import reconcile
from fmdates.infrastructure.filesystem import read_record, walk_content, write_record
from fmdates.infrastructure.git import GitError, last_edit_date
from fmdates.services._helpers import local_today
from fmdates.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from fmdates.config.settings import FmSettings

log = structlog.get_logger(__name__)


class FileStatus(StrEnum):
    """Per-file outcome of a run."""

    UPDATED = "updated"
    WOULD_UPDATE = "would_update"
    UNCHANGED = "unchanged"
    ERROR = "error"


class FileOutcome(BaseModel):
    """What happened to one file."""

    model_config = {"frozen": True}

    path: str
    status: FileStatus
    date: str | None = None
    updated: str | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None


class UpdateService:
    """Applies date reconciliation to every eligible file under some paths."""

    def __init__(self, settings: FmSettings) -> None:
        self._settings = settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(
        self,
        paths: Sequence[Path],
        *,
        dry_run: bool = False,
        today: date | None = None,
    ) -> ServiceResult:
        """Reconcile and rewrite stale files. ``dry_run`` reports only."""
        return self._run("update", paths, write=not dry_run, today=today)

    def check(self, paths: Sequence[Path], *, today: date | None = None) -> ServiceResult:
        """Report stale files without writing. Fails if any file is stale."""
        return self._run("check", paths, write=False, today=today)

    def process_file(self, path: Path, *, today: date, write: bool = True) -> FileOutcome:
        """Reconcile a single file. Fatal per-file errors become an ERROR outcome."""
        try:
            record = read_record(path)
            last_edit = last_edit_date(path, executable=self._settings.git.executable)
            existing_date, existing_updated = record.existing_dates()
            result = reconcile(last_edit, existing_date, existing_updated, today=today)
        except (FrontMatterError, GitError, OSError, UnicodeDecodeError) as exc:
            return self._failed(path, exc)

        warnings: list[str] = []
        for event in result.events:
            log.warning(
                "dates.sanitized",
                path=str(path),
                key=event.key,
                reason=str(event.reason),
                value=event.value,
            )
            warnings.append(f"{path}: {event.message}")

        if not result.changed:
            status = FileStatus.UNCHANGED
        elif write:
            try:
                write_record(record.with_dates(result))
            except OSError as exc:
                return self._failed(path, exc)
            status = FileStatus.UPDATED
        else:
            status = FileStatus.WOULD_UPDATE

        log.info("file.processed", path=str(path), status=str(status))
        return FileOutcome(
            path=str(path),
            status=status,
            date=result.date.isoformat(),
            updated=result.updated.isoformat() if result.updated else None,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(
        self,
        op: str,
        paths: Sequence[Path],
        *,
        write: bool,
        today: date | None,
    ) -> ServiceResult:
        run_today = today or local_today()

        missing = [str(p) for p in paths if not p.exists()]
        if missing:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorCode.PATH_NOT_FOUND,
                    message=f"Path does not exist: {', '.join(missing)}",
                    detail={"paths": missing},
                ),
            )

        proc = self._settings.processing
        try:
            files = list(
                walk_content(
                    paths,
                    extension=proc.extension,
                    index_filename=proc.index_filename,
                    skip_dirs=proc.skip_dirs,
                )
            )
        except OSError as exc:
            log.error("traversal.failed", error=str(exc))
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code=ErrorCode.TRAVERSAL_FAILED, message=str(exc)),
            )

        outcomes = sorted(
            self._process_all(files, today=run_today, write=write),
            key=lambda o: o.path,
        )
        return self._summarize(op, outcomes, today=run_today, write=write)

    def _process_all(self, files: list[Path], *, today: date, write: bool) -> list[FileOutcome]:
        """Process files on a bounded thread pool (inline when workers == 1)."""
        workers = self._settings.processing.workers
        if workers <= 1 or len(files) <= 1:
            return [self.process_file(f, today=today, write=write) for f in files]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda f: self.process_file(f, today=today, write=write), files))

    @staticmethod
    def _failed(path: Path, exc: Exception) -> FileOutcome:
        log.error("file.failed", path=str(path), error=str(exc), error_type=type(exc).__name__)
        return FileOutcome(
            path=str(path),
            status=FileStatus.ERROR,
            error=f"{type(exc).__name__}: {exc}",
        )

    @staticmethod
    def _summarize(
        op: str,
        outcomes: list[FileOutcome],
        *,
        today: date,
        write: bool,
    ) -> ServiceResult:
        counts = {status: 0 for status in FileStatus}
        for outcome in outcomes:
            counts[outcome.status] += 1

        data = {
            "files": [o.model_dump(mode="json") for o in outcomes],
            "count": len(outcomes),
            "updated": counts[FileStatus.UPDATED],
            "would_update": counts[FileStatus.WOULD_UPDATE],
            "unchanged": counts[FileStatus.UNCHANGED],
            "errors": counts[FileStatus.ERROR],
            "today": today.isoformat(),
            "dry_run": op == "update" and not write,
        }
        warnings = [w for o in outcomes for w in o.warnings]

        error: ServiceError | None = None
        if counts[FileStatus.ERROR]:
            failed = [o for o in outcomes if o.status == FileStatus.ERROR]
            error = ServiceError(
                code=ErrorCode.FILE_ERRORS,
                message=f"{len(failed)} of {len(outcomes)} files failed",
                detail={"files": {o.path: o.error for o in failed}},
            )
        elif op == "check" and counts[FileStatus.WOULD_UPDATE]:
            error = ServiceError(
                code=ErrorCode.STALE_DATES,
                message=f"{counts[FileStatus.WOULD_UPDATE]} files have stale dates",
            )

        return ServiceResult(
            ok=error is None,
            op=op,
            data=data,
            warnings=warnings,
            error=error,
        )
