# src/organizer/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class TaskStore:
    """
    Task list persistence over the key/value port.

    The whole list is stored as one JSON array under "tasks"; records are
    validated on load and invalid ones are dropped.
    """

    def __init__(self, kv: KeyValueStore, key: str = TASKS_KEY) -> None:
        self._kv = kv
        self._key = key

    def load(self) -> list[Task]:
        try:
            blob = self._kv.load(self._key)
        except Exception:
            logger.exception("Failed to read %s from storage", self._key)
            return []
        if not blob:
            return []
        try:
            raw = json.loads(blob)
        except ValueError:
            logger.exception("Stored %s is not valid JSON; starting empty", self._key)
            return []
        if not isinstance(raw, list):
            logger.warning("Stored %s is not a list; starting empty", self._key)
            return []

        tasks = [t for t in (Task.from_record(r) for r in raw) if t is not None]
        if len(tasks) != len(raw):
            logger.warning("Loaded %d/%d task records (invalid ones dropped)", len(tasks), len(raw))
        else:
            logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        blob = json.dumps([t.to_record() for t in tasks], ensure_ascii=False)
        self._kv.save(self._key, blob)

    def clear(self) -> None:
        self._kv.remove(self._key)
