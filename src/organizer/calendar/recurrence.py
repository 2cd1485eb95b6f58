# src/organizer/calendar/recurrence.py

from __future__ import annotations

"""
Recurrence expansion.

Turns one task's (start date, frequency, end date) into the finite list of
calendar days on which it is shown. Time of day never affects recurrence;
both ends of the range are plain dates and the range is inclusive.

Policy:
- ONCE, or a recurring task without an end date: only the start day.
- end date before start date: no occurrences at all (the start day is not emitted).
- MONTHLY on a day the candidate month does not have (29-31) lands on that
  month's last day; a task starting on the last day of its own month lands on
  the last day of every month.
- YEARLY has no Feb 29 fallback: it simply does not occur in common years.
"""

import calendar
import datetime as dt
import logging
from collections.abc import Iterator

from ..tasks.task_models import Frequency, Task
from .date_keys import INVALID_DATE_KEY, DateKey, TzLike, format_date_key

logger = logging.getLogger(__name__)

_ONE_DAY = dt.timedelta(days=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _is_last_day(day: dt.date) -> bool:
    return day.day == days_in_month(day.year, day.month)


def occurs_on(task: Task, day: dt.date) -> bool:
    """
    Frequency rule for a single candidate day inside the task's range.

    Range bounds are the caller's job; this only answers "does the pattern match".
    """
    start = task.start_date
    freq = task.frequency

    if freq is Frequency.ONCE:
        return day == start
    if freq is Frequency.DAILY:
        return True
    if freq is Frequency.WEEKLY:
        return day.weekday() == start.weekday()
    if freq is Frequency.MONTHLY:
        if day.day == start.day:
            return True
        if not _is_last_day(day):
            return False
        # start day missing from this month, or start was itself a month-end
        return start.day > days_in_month(day.year, day.month) or _is_last_day(start)
    if freq is Frequency.YEARLY:
        return day.month == start.month and day.day == start.day
    return False


def iter_occurrence_dates(task: Task) -> Iterator[dt.date]:
    start = task.start_date

    if task.frequency is Frequency.ONCE or task.end_date is None:
        yield start
        return

    # offsets, not a running date: stepping past date.max would overflow
    for offset in range((task.end_date - start).days + 1):
        current = start + offset * _ONE_DAY
        if occurs_on(task, current):
            yield current


def expand(task: Task, tz: TzLike = None) -> list[DateKey]:
    """All date keys on which the task is active, ascending. Sentinel keys are dropped."""
    keys: list[DateKey] = []
    for day in iter_occurrence_dates(task):
        key = format_date_key(day, tz)
        if key == INVALID_DATE_KEY:
            logger.debug("Skipping unresolvable occurrence %r for task %r", day, task.text)
            continue
        keys.append(key)
    return keys
