"""Calendar-date comparison primitives.

Front matter values arrive as whatever the TOML parser produced: plain
``date`` objects, ``datetime`` objects carrying a time and offset, or
something else entirely (strings, integers, local times). Only the
``(year, month, day)`` triple is ever compared.

INVARIANT: A non-date operand never compares as ordered or equal to
anything, itself included.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def as_calendar_date(value: Any) -> date | None:
    """Reduce *value* to a plain ``date``, or None if it is not a date.

    ``datetime`` is a ``date`` subclass, so it is checked first and its
    time-of-day and offset are dropped.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    return None


def is_date(value: Any) -> bool:
    """Whether *value* carries a calendar date."""
    return as_calendar_date(value) is not None


def less_than(a: Any, b: Any) -> bool:
    """``a < b`` when both are dates, otherwise False."""
    left, right = as_calendar_date(a), as_calendar_date(b)
    if left is None or right is None:
        return False
    return left < right


def equal(a: Any, b: Any) -> bool:
    """``a == b`` when both are dates, otherwise False."""
    left, right = as_calendar_date(a), as_calendar_date(b)
    if left is None or right is None:
        return False
    return left == right


def less_than_or_equal(a: Any, b: Any) -> bool:
    """``a <= b`` when both are dates, otherwise False."""
    return less_than(a, b) or equal(a, b)
