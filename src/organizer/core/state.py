# src/organizer/core/state.py

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..auth.session import Authenticator, AuthUser
from ..calendar.calendar_index import CalendarIndex, CalendarIndexCache
from ..files.file_store import FileTree
from ..notes.note_store import NoteStore
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .ports import KeyValueStore

logger = logging.getLogger(__name__)


class View(StrEnum):
    CALENDAR = "calendar"
    FILES = "files"
    ALL_TASKS = "tasks"
    NOTES = "notes"


@dataclass
class AppState:
    # Settings object (config.Settings or a SimpleNamespace in tests).
    settings: Any

    storage: KeyValueStore
    session: KeyValueStore
    auth: Authenticator

    task_store: TaskStore
    files: FileTree
    notes: NoteStore
    calendar_cache: CalendarIndexCache

    user: AuthUser | None = None
    tasks: list[Task] = field(default_factory=list)

    view: View = View.CALENDAR
    selected_date: dt.date = field(default_factory=dt.date.today)
    current_folder: str | None = None

    @property
    def tz(self) -> str:
        return str(getattr(self.settings, "timezone", "") or "")

    @property
    def signed_in(self) -> bool:
        return self.user is not None

    def calendar_index(self) -> CalendarIndex:
        return self.calendar_cache.get(self.tasks)

    # Local storage is written only while someone is signed in.

    def persist_tasks(self) -> None:
        if self.user is None:
            return
        self.task_store.save(self.tasks)

    def persist_files(self) -> None:
        if self.user is None:
            return
        self.files.save()

    def persist_notes(self) -> None:
        if self.user is None:
            return
        self.notes.save()

    def load_all(self) -> None:
        self.tasks = self.task_store.load()
        self.files.load()
        self.notes.load()
        logger.info(
            "State loaded: tasks=%d files=%d notes=%d",
            len(self.tasks),
            len(self.files),
            len(self.notes.notes),
        )
