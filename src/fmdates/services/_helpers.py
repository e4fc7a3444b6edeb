"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import date, datetime


def local_today() -> date:
    """Today's calendar date in the local timezone.

    Read once per run and passed down, so every file in a run agrees on
    what "today" is even across midnight.
    """
    return datetime.now().astimezone().date()
