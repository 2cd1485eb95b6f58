# src/organizer/notes/note_store.py

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

from ..core.ports import KeyValueStore

logger = logging.getLogger(__name__)

NOTES_KEY = "notes"
OPEN_NOTES_KEY = "openNoteIds"


class NoteError(ValueError):
    pass


@dataclass(slots=True)
class Note:
    id: int
    content: str


class NoteStore:
    """
    Plain list of notes plus the set of notes currently expanded.

    Open note ids are saved on every change; the notes themselves are saved
    by the caller (only while a user is signed in).
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self.notes: list[Note] = []
        self.open_ids: list[int] = []

    # ---- persistence ----

    def _load_list(self, key: str) -> list[Any]:
        try:
            blob = self._kv.load(key)
        except Exception:
            logger.exception("Failed to read %s from storage", key)
            return []
        if not blob:
            return []
        try:
            raw = json.loads(blob)
        except ValueError:
            logger.exception("Stored %s is not valid JSON; starting empty", key)
            return []
        return raw if isinstance(raw, list) else []

    def load(self) -> None:
        notes: list[Note] = []
        for r in self._load_list(NOTES_KEY):
            if isinstance(r, dict) and isinstance(r.get("id"), int):
                notes.append(Note(id=r["id"], content=str(r.get("content") or "")))
            else:
                logger.warning("Dropping invalid note record: %r", r)
        self.notes = notes
        self.open_ids = [i for i in self._load_list(OPEN_NOTES_KEY) if isinstance(i, int)]

    def save(self) -> None:
        self._kv.save(NOTES_KEY, json.dumps([{"id": n.id, "content": n.content} for n in self.notes]))

    def _save_open_ids(self) -> None:
        self._kv.save(OPEN_NOTES_KEY, json.dumps(self.open_ids))

    def clear(self) -> None:
        self.notes = []
        self._kv.remove(NOTES_KEY)

    # ---- queries ----

    def get(self, note_id: int) -> Note:
        for n in self.notes:
            if n.id == note_id:
                return n
        raise NoteError(f"No such note: {note_id}")

    def label(self, note_id: int) -> str:
        for pos, n in enumerate(self.notes, start=1):
            if n.id == note_id:
                return f"Note {pos}"
        raise NoteError(f"No such note: {note_id}")

    def is_open(self, note_id: int) -> bool:
        return note_id in self.open_ids

    # ---- mutations ----

    def add(self, content: str) -> Note:
        if not (content or "").strip():
            raise NoteError("Note content is empty.")
        note_id = int(time.time() * 1000)
        existing = {n.id for n in self.notes}
        while note_id in existing:
            note_id += 1
        note = Note(id=note_id, content=content)
        self.notes.append(note)
        self.toggle(note.id)
        logger.debug("Note added id=%s", note.id)
        return note

    def update(self, note_id: int, content: str) -> Note:
        note = self.get(note_id)
        note.content = content
        return note

    def delete(self, note_id: int) -> None:
        self.get(note_id)
        self.notes = [n for n in self.notes if n.id != note_id]
        if note_id in self.open_ids:
            self.open_ids = [i for i in self.open_ids if i != note_id]
            self._save_open_ids()
        logger.debug("Note deleted id=%s", note_id)

    def toggle(self, note_id: int) -> bool:
        """Expand/collapse a note; returns the new open state."""
        self.get(note_id)
        if note_id in self.open_ids:
            self.open_ids = [i for i in self.open_ids if i != note_id]
            opened = False
        else:
            self.open_ids = [*self.open_ids, note_id]
            opened = True
        self._save_open_ids()
        return opened
