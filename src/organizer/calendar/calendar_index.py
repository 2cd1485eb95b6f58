# src/organizer/calendar/calendar_index.py

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from typing import NamedTuple

from ..tasks.task_models import Task
from .date_keys import DateKey, TzLike, format_date_key
from .recurrence import expand

logger = logging.getLogger(__name__)


class IndexedTask(NamedTuple):
    """A task plus its position in the task list (used by edit/delete)."""

    task: Task
    index: int


CalendarIndex = dict[DateKey, list[IndexedTask]]


def build_calendar_index(tasks: Sequence[Task], tz: TzLike = None) -> CalendarIndex:
    """
    Map each date key to the tasks active on it.

    Full rebuild, no side effects. Buckets keep task-list order.
    """
    index: CalendarIndex = {}
    for i, task in enumerate(tasks):
        entry = IndexedTask(task, i)
        for key in expand(task, tz):
            index.setdefault(key, []).append(entry)
    logger.debug("Calendar index built: %d tasks -> %d days", len(tasks), len(index))
    return index


def tasks_for_day(index: CalendarIndex, day: dt.date | dt.datetime | str, tz: TzLike = None) -> list[IndexedTask]:
    key = format_date_key(day, tz)
    if not key:
        return []
    return list(index.get(key, ()))


class CalendarIndexCache:
    """
    Memoized index: rebuilt only when the task list snapshot changes.

    Tasks are frozen dataclasses, so a tuple of them is a valid cache key.
    """

    def __init__(self, tz: TzLike = None) -> None:
        self._tz = tz
        self._snapshot: tuple[Task, ...] | None = None
        self._index: CalendarIndex = {}
        self.rebuilds = 0

    def get(self, tasks: Sequence[Task]) -> CalendarIndex:
        snapshot = tuple(tasks)
        if snapshot != self._snapshot:
            self._index = build_calendar_index(snapshot, self._tz)
            self._snapshot = snapshot
            self.rebuilds += 1
        return self._index
