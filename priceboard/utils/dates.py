"""Datetime helpers.

Naive datetimes and plain dates are read as local time in the configured
``TIMEZONE``; timestamps loaded from the database are marked UTC with
:func:`as_utc` before they reach the board.
"""

from __future__ import annotations

import os
from datetime import date, datetime, timezone

import pendulum

DEFAULT_TZ = "America/Toronto"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def now_in_tz() -> pendulum.DateTime:
    tz = pendulum.timezone(timezone_name())
    return pendulum.now(tz)


def localize(moment: date | datetime) -> pendulum.DateTime:
    """Aware instant for ``moment``; a plain date becomes local midnight."""
    tz = pendulum.timezone(timezone_name())
    if not isinstance(moment, datetime):
        return pendulum.datetime(moment.year, moment.month, moment.day, tz=tz)
    return pendulum.instance(moment, tz=tz)


def local_day(moment: date | datetime) -> date:
    """Calendar day of ``moment`` in the configured timezone."""
    if not isinstance(moment, datetime):
        return moment
    return localize(moment).in_timezone(timezone_name()).date()


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_since(created_at: date | datetime, now: date | datetime | None = None) -> int:
    """Whole days elapsed since ``created_at``, rounded half up, never negative."""
    start = localize(created_at)
    end = localize(now) if now is not None else now_in_tz()
    elapsed = (end - start).total_seconds() / 86400
    return max(0, int(elapsed + 0.5))
