# src/organizer/views/calendar_view.py

"""Plain-text renderings of the organizer views for the console."""

from __future__ import annotations

import calendar
import datetime as dt

from ..calendar.calendar_index import tasks_for_day
from ..calendar.date_keys import format_date_key, today_key
from ..calendar.month_grid import WEEKDAY_NAMES, grid_weeks, month_grid
from ..core.state import AppState
from ..files.file_models import FolderRecord
from ..tasks.task_models import Task

_CELL_W = 6


def describe_task(task: Task) -> str:
    parts = [task.text, f"- {task.start_date.isoformat()}"]
    if task.start_time is not None:
        parts.append(task.start_time.strftime("%H:%M"))
    parts.append(f"({task.frequency.value})")
    if task.end_date is not None:
        parts.append(f"(Ends: {task.end_date.isoformat()})")
    return " ".join(parts)


def render_month(state: AppState) -> str:
    year, month = state.selected_date.year, state.selected_date.month
    index = state.calendar_index()
    today = today_key(state.tz)
    min_cells = int(getattr(state.settings, "calendar_min_cells", 35) or 35)

    title = f"{getattr(state.settings, 'app_name', 'The Organizer')} - {calendar.month_name[month]} {year}"
    lines = [title, "".join(name.ljust(_CELL_W) for name in WEEKDAY_NAMES)]

    for week in grid_weeks(month_grid(year, month, min_cells)):
        row = []
        for day in week:
            if day is None:
                row.append("".ljust(_CELL_W))
                continue
            key = format_date_key(day, state.tz)
            mark = "*" if key == today else " "
            count = len(index.get(key, ()))
            cell = f"{day.day:>2}{mark}"
            if count:
                cell += f"{count}"
            row.append(cell.ljust(_CELL_W))
        lines.append("".join(row).rstrip())

    lines.append("(* today, number = tasks that day; /day YYYY-MM-DD for details)")
    return "\n".join(lines)


def render_day(state: AppState, day: dt.date) -> str:
    entries = tasks_for_day(state.calendar_index(), day, state.tz)
    header = f"Tasks on {day.isoformat()}:"
    if not entries:
        return f"{header}\n  (none)"
    lines = [header]
    for entry in entries:
        lines.append(f"  #{entry.index} {describe_task(entry.task)}")
    return "\n".join(lines)


def render_all_tasks(state: AppState) -> str:
    if not state.tasks:
        return "All Tasks:\n  (none)"
    lines = ["All Tasks:"]
    for i, task in enumerate(state.tasks):
        lines.append(f"  #{i} {describe_task(task)}")
    return "\n".join(lines)


def render_folder(state: AppState) -> str:
    crumbs = state.files.path_to(state.current_folder)
    where = "/" + "/".join(f.name for f in crumbs)
    items = state.files.children(state.current_folder)
    lines = [f"Files in {where}:"]
    if not items:
        lines.append("  (empty)")
    for item in items:
        if isinstance(item, FolderRecord):
            lines.append(f"  [dir]  {item.name}  ({item.id})")
        else:
            lines.append(f"  [file] {item.name}  {item.date}  ({item.id})")
    return "\n".join(lines)


def render_notes(state: AppState) -> str:
    notes = state.notes.notes
    if not notes:
        return "Notes:\n  (none)"
    lines = ["Notes:"]
    for pos, note in enumerate(notes, start=1):
        lines.append(f"  Note {pos} ({note.id})")
        if state.notes.is_open(note.id):
            for text_line in note.content.splitlines() or [""]:
                lines.append(f"    {text_line}")
    return "\n".join(lines)
