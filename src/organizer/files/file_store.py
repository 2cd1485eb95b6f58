# src/organizer/files/file_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable
from pathlib import Path

from ..calendar.date_keys import format_date_key, today_key
from ..core.ports import BlobStore, KeyValueStore
from .file_models import FileRecord, FolderRecord, Item, record_from_dict

logger = logging.getLogger(__name__)

FILES_KEY = "myFiles"


class FileStoreError(ValueError):
    """User-facing file/folder errors (missing name, unknown folder, unreadable upload)."""


class FileTree:
    """
    Folder hierarchy stored as a flat list with parent-id back-references.

    Items are kept in insertion order (the folder listing order) and indexed by id.
    Deleting a folder removes its whole subtree and releases every removed
    file's stored content.
    """

    def __init__(self, kv: KeyValueStore, blobs: BlobStore, *, tz=None, key: str = FILES_KEY) -> None:
        self._kv = kv
        self._blobs = blobs
        self._tz = tz
        self._key = key
        self._items: dict[str, Item] = {}

    # ---- persistence ----

    def load(self) -> None:
        self._items = {}
        try:
            blob = self._kv.load(self._key)
        except Exception:
            logger.exception("Failed to read %s from storage", self._key)
            return
        if not blob:
            return
        try:
            raw = json.loads(blob)
        except ValueError:
            logger.exception("Stored %s is not valid JSON; starting empty", self._key)
            return
        if not isinstance(raw, list):
            logger.warning("Stored %s is not a list; starting empty", self._key)
            return
        for r in raw:
            item = record_from_dict(r)
            if item is not None and item.id not in self._items:
                self._items[item.id] = item
        logger.debug("Loaded %d file/folder records", len(self._items))

    def save(self) -> None:
        self._kv.save(self._key, json.dumps([i.to_dict() for i in self._items.values()], ensure_ascii=False))

    def clear(self) -> None:
        """Forget all records (storage key included). Stored contents are released."""
        for item in self._items.values():
            if isinstance(item, FileRecord) and item.content_ref:
                self._release(item)
        self._items = {}
        self._kv.remove(self._key)

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def items(self) -> list[Item]:
        return list(self._items.values())

    def children(self, parent_id: str | None) -> list[Item]:
        return [i for i in self._items.values() if i.parent_id == parent_id]

    def get_folder(self, folder_id: str | None) -> FolderRecord | None:
        if folder_id is None:
            return None
        item = self._items.get(folder_id)
        if not isinstance(item, FolderRecord):
            raise FileStoreError(f"No such folder: {folder_id}")
        return item

    def path_to(self, folder_id: str | None) -> list[FolderRecord]:
        """Breadcrumb from the root down to folder_id (empty for the root)."""
        path: list[FolderRecord] = []
        seen: set[str] = set()
        current = folder_id
        while current is not None and current not in seen:
            seen.add(current)
            item = self._items.get(current)
            if not isinstance(item, FolderRecord):
                break
            path.append(item)
            current = item.parent_id
        path.reverse()
        return path

    def descendant_ids(self, item_id: str) -> list[str]:
        """item_id plus every item below it, parents before children."""
        if item_id not in self._items:
            return []
        by_parent: dict[str | None, list[str]] = {}
        for item in self._items.values():
            by_parent.setdefault(item.parent_id, []).append(item.id)

        out: list[str] = []
        seen: set[str] = set()
        stack = [item_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            out.append(current)
            stack.extend(reversed(by_parent.get(current, [])))
        return out

    # ---- mutations ----

    def _new_id(self, prefix: str, suffix: str = "") -> str:
        ms = int(time.time() * 1000)
        while True:
            candidate = f"{prefix}-{ms}{suffix}"
            if candidate not in self._items:
                return candidate
            ms += 1

    def create_folder(self, name: str, parent_id: str | None = None) -> FolderRecord:
        clean = (name or "").strip()
        if not clean:
            raise FileStoreError("Folder name is required.")
        self.get_folder(parent_id)

        folder = FolderRecord(id=self._new_id("folder"), name=clean, parent_id=parent_id)
        self._items[folder.id] = folder
        logger.info("Folder created id=%s name=%s parent=%s", folder.id, folder.name, parent_id)
        return folder

    def upload(
        self,
        paths: Iterable[str | Path],
        parent_id: str | None = None,
        *,
        title: str = "",
        date: str | None = None,
    ) -> list[FileRecord]:
        """
        Add one file record per path, storing each file's content.

        A non-blank title renames the upload to "<title>.<ext>", ext being the
        part of the source name after its last dot.
        """
        self.get_folder(parent_id)
        file_date = format_date_key(date, self._tz) if date else today_key(self._tz)
        if not file_date:
            raise FileStoreError(f"Invalid file date: {date!r}")

        title = (title or "").strip()
        ms = int(time.time() * 1000)
        added: list[FileRecord] = []
        for i, raw_path in enumerate(paths):
            src = Path(raw_path).expanduser()
            try:
                ref = self._blobs.put(src)
            except OSError as e:
                for rec in added:
                    self._release(rec)
                    self._items.pop(rec.id, None)
                raise FileStoreError(f"Cannot read {src}: {e}") from e

            name = f"{title}.{src.name.rsplit('.', 1)[-1]}" if title else src.name
            file_id = f"file-{ms}-{i}"
            while file_id in self._items:
                ms += 1
                file_id = f"file-{ms}-{i}"

            rec = FileRecord(id=file_id, name=name, parent_id=parent_id, date=file_date, content_ref=ref)
            self._items[rec.id] = rec
            added.append(rec)

        logger.info("Uploaded %d file(s) into parent=%s", len(added), parent_id)
        return added

    def remove(self, item_id: str) -> list[str]:
        """
        Delete an item and, for folders, everything below it.

        The full id set is computed before anything is mutated. Returns the
        removed ids (empty if item_id is unknown).
        """
        ids = self.descendant_ids(item_id)
        if not ids:
            return []

        for i in ids:
            item = self._items[i]
            if isinstance(item, FileRecord) and item.content_ref:
                self._release(item)

        doomed = set(ids)
        self._items = {k: v for k, v in self._items.items() if k not in doomed}
        logger.info("Removed %d item(s) rooted at %s", len(ids), item_id)
        return ids

    def _release(self, rec: FileRecord) -> None:
        try:
            self._blobs.release(rec.content_ref or "")
        except Exception:
            logger.exception("Failed to release content for file id=%s", rec.id)
