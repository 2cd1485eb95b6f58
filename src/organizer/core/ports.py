# src/organizer/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the application.

Stores and actions depend on Protocols instead of concrete storage, so the
sqlite-backed "local storage" and the in-memory "session storage" are swappable
and tests can run without touching disk.
"""

from pathlib import Path
from typing import Protocol


class KeyValueStore(Protocol):
    """
    Persistence port: string keys to serialized blobs (JSON text).

    Keys used by the app: "tasks", "myFiles", "notes", "openNoteIds", "currentUser".
    """

    def load(self, key: str) -> str | None: ...
    def save(self, key: str, blob: str) -> None: ...
    def remove(self, key: str) -> None: ...


class BlobStore(Protocol):
    """
    Holds uploaded file contents.

    Every content_ref returned by put() must be released exactly once,
    when the owning file record is deleted.
    """

    def put(self, src: Path) -> str: ...
    def release(self, content_ref: str) -> None: ...
    def open_path(self, content_ref: str) -> Path | None: ...
