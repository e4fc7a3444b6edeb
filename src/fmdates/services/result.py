"""ServiceResult — what every service call hands back to the CLI.

INVARIANT: Services never raise for per-file problems. A run that touched
some files before failing still reports them in ``data``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Why a run is reported as failed (exit status 1)."""

    FILE_ERRORS = "FILE_ERRORS"
    STALE_DATES = "STALE_DATES"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    TRAVERSAL_FAILED = "TRAVERSAL_FAILED"


class ServiceError(BaseModel):
    """Failure summary; ``detail`` carries per-path specifics."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of ``update`` or ``check``.

    Attributes:
        ok: False when ``error`` is set.
        op: ``"update"`` or ``"check"``.
        data: Per-file outcomes and counts, present on failure too.
        warnings: Sanitization messages, one per discarded value.
        error: Set when the run should exit non-zero.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
