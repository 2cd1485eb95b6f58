# src/organizer/tasks/task_api.py

from __future__ import annotations

import datetime as dt
import logging

from ..core.state import AppState
from .task_models import Frequency, Task, TaskValidationError

logger = logging.getLogger(__name__)


def add_task(
    state: AppState,
    *,
    text: str,
    date: dt.date | str | None,
    time: dt.time | str | None = None,
    frequency: Frequency | str = Frequency.ONCE,
    end_date: dt.date | str | None = None,
) -> int:
    """
    Append a task and persist the list. Returns its index.

    Raises TaskValidationError for empty text or a missing/invalid date; the
    task list is left untouched in that case.
    """
    task = Task.create(text=text, start=date, start_time=time, frequency=frequency, end_date=end_date)
    state.tasks = [*state.tasks, task]
    state.persist_tasks()
    index = len(state.tasks) - 1
    logger.info("Task added index=%d frequency=%s start=%s", index, task.frequency.value, task.start_date)
    return index


def _check_index(state: AppState, index: int) -> Task:
    if not 0 <= index < len(state.tasks):
        raise TaskValidationError(f"No task #{index}.")
    return state.tasks[index]


def edit_task(
    state: AppState,
    index: int,
    *,
    text: str | None = None,
    date: dt.date | str | None = None,
    time: dt.time | str | None = None,
    frequency: Frequency | str | None = None,
    end_date: dt.date | str | None = None,
    clear_time: bool = False,
    clear_end_date: bool = False,
) -> Task:
    """
    Replace the task at index with an edited copy.

    Omitted fields keep their current value. Switching to ONCE drops the end date.
    """
    old = _check_index(state, index)

    new_time: dt.time | str | None = None if clear_time else (time if time is not None else old.start_time)
    new_end: dt.date | str | None
    if clear_end_date:
        new_end = None
    else:
        new_end = end_date if end_date is not None else old.end_date

    task = Task.create(
        text=old.text if text is None else text,
        start=old.start_date if date is None else date,
        start_time=new_time,
        frequency=old.frequency if frequency is None else frequency,
        end_date=new_end,
    )

    tasks = list(state.tasks)
    tasks[index] = task
    state.tasks = tasks
    state.persist_tasks()
    logger.info("Task edited index=%d", index)
    return task


def remove_task(state: AppState, index: int) -> Task:
    removed = _check_index(state, index)
    state.tasks = [t for i, t in enumerate(state.tasks) if i != index]
    state.persist_tasks()
    logger.info("Task removed index=%d", index)
    return removed


def list_tasks(state: AppState) -> list[tuple[int, Task]]:
    return list(enumerate(state.tasks))
