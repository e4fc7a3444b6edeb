"""Date reconciliation — derive a consistent ``(date, updated)`` pair.

Inputs are the last git edit date of a file, the file's current ``date``
and ``updated`` front matter values (each possibly absent or of the wrong
type), and the calendar date of the run. The result is a new pair plus a
flag telling whether the front matter needs rewriting.

The function is pure. Sanitization events are returned on the result
instead of being logged here; the service layer reports them.

Rules:
  1. Non-date values are discarded.
  2. ``updated`` earlier than ``date`` is discarded.
  3. Dates later than today are discarded (each field nulls itself).
  4. Decision table on (last_edit?, date?, updated?).
  5. Change detection against the ORIGINAL values, by calendar date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

from fmdates.domain.dates import (
    as_calendar_date,
    equal,
    is_date,
    less_than,
    less_than_or_equal,
)

DATE_KEY = "date"
UPDATED_KEY = "updated"
LAST_EDIT = "last_edit"


class SanitizeReason(StrEnum):
    """Why an input value was dropped before the decision table."""

    NON_DATE_VALUE = "non_date_value"
    UPDATED_BEFORE_DATE = "updated_before_date"
    FUTURE_DATE = "future_date"


_MESSAGES: dict[SanitizeReason, str] = {
    SanitizeReason.NON_DATE_VALUE: "Non date value found for `{key}`, ignoring it",
    SanitizeReason.UPDATED_BEFORE_DATE: "`updated` is before `date`, ignoring `updated`",
    SanitizeReason.FUTURE_DATE: "`{key}` is set in the future, ignoring it",
}


@dataclass(frozen=True)
class SanitizeEvent:
    """One discarded (or clamped) input value."""

    key: str
    reason: SanitizeReason
    value: str

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason].format(key=self.key)


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of :func:`reconcile`.

    Attributes:
        date: New ``date``; always set and never after today.
        updated: New ``updated``, or None when the key should be absent.
        changed: Whether the front matter differs from the original values.
        events: Sanitization events, in the order they were detected.
    """

    date: date
    updated: date | None
    changed: bool
    events: tuple[SanitizeEvent, ...] = field(default_factory=tuple)


def reconcile(
    last_edit: date | None,
    existing_date: Any | None,
    existing_updated: Any | None,
    *,
    today: date,
) -> Reconciliation:
    """Compute the reconciled ``(date, updated)`` pair for one file.

    Args:
        last_edit: Date of the last commit touching the file, None if the
            file was never committed.
        existing_date: Current ``date`` value, None if the key is absent.
        existing_updated: Current ``updated`` value, None if absent.
        today: Calendar date of the run.
    """
    events: list[SanitizeEvent] = []
    today = as_calendar_date(today) or today

    cur_date = _sanitize_type(DATE_KEY, existing_date, events)
    cur_updated = _sanitize_type(UPDATED_KEY, existing_updated, events)

    if cur_date is not None and cur_updated is not None and less_than(cur_updated, cur_date):
        events.append(
            SanitizeEvent(UPDATED_KEY, SanitizeReason.UPDATED_BEFORE_DATE, str(cur_updated))
        )
        cur_updated = None

    if cur_date is not None and less_than(today, cur_date):
        events.append(SanitizeEvent(DATE_KEY, SanitizeReason.FUTURE_DATE, str(cur_date)))
        cur_date = None
    if cur_updated is not None and less_than(today, cur_updated):
        events.append(SanitizeEvent(UPDATED_KEY, SanitizeReason.FUTURE_DATE, str(cur_updated)))
        cur_updated = None

    # A commit dated after today (clock skew) counts as an edit made today.
    last = as_calendar_date(last_edit)
    if last is not None and less_than(today, last):
        events.append(SanitizeEvent(LAST_EDIT, SanitizeReason.FUTURE_DATE, str(last)))
        last = today

    assert cur_date is None or less_than_or_equal(cur_date, today), "date must be <= today"
    assert cur_updated is None or less_than_or_equal(cur_updated, today), "updated must be <= today"
    assert (
        cur_date is None or cur_updated is None or less_than_or_equal(cur_date, cur_updated)
    ), "date must be <= updated"

    new_date, new_updated = _decide(last, cur_date, cur_updated, today)

    assert less_than_or_equal(new_date, today)
    assert new_updated is None or (
        less_than_or_equal(new_date, new_updated) and less_than_or_equal(new_updated, today)
    )

    return Reconciliation(
        date=new_date,
        updated=new_updated,
        changed=_is_changed(existing_date, existing_updated, new_date, new_updated),
        events=tuple(events),
    )


def _sanitize_type(key: str, value: Any | None, events: list[SanitizeEvent]) -> date | None:
    if value is None:
        return None
    if not is_date(value):
        events.append(SanitizeEvent(key, SanitizeReason.NON_DATE_VALUE, repr(value)))
        return None
    return as_calendar_date(value)


def _decide(
    last: date | None,
    cur_date: date | None,
    cur_updated: date | None,
    today: date,
) -> tuple[date, date | None]:
    """Step 4: the decision table. Inputs are already sanitized."""
    if last is None:
        if cur_date is None:
            # First run on an uncommitted file
            return today, None
        # Never committed but dated: stamp updated unless it was written today
        return cur_date, None if equal(cur_date, today) else today

    if cur_date is None:
        return last, None if equal(last, today) else today

    if cur_updated is None:
        # Only stale when git saw an edit after `date`
        return cur_date, None if less_than_or_equal(last, cur_date) else today

    if less_than_or_equal(last, cur_updated):
        return cur_date, cur_updated
    return cur_date, today


def _is_changed(
    org_date: Any | None,
    org_updated: Any | None,
    new_date: date,
    new_updated: date | None,
) -> bool:
    """Step 5: compare by calendar date against the untouched original values."""
    is_date_same = org_date is not None and equal(org_date, new_date)
    if org_updated is None:
        is_updated_same = new_updated is None
    else:
        is_updated_same = new_updated is not None and equal(org_updated, new_updated)
    return not (is_date_same and is_updated_same)
