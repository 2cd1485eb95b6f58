# src/organizer/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage ports into AppState,
- restores a session left from a previous sign-in.
"""

from __future__ import annotations

import logging

from ..auth.session import Authenticator
from ..calendar.calendar_index import CalendarIndexCache
from ..calendar.date_keys import resolve_timezone, today
from ..config import get_settings
from ..core.ports import BlobStore, KeyValueStore
from ..core.state import AppState
from ..files.file_store import FileTree
from ..notes.note_store import NoteStore
from ..storage.blob_store import DirectoryBlobStore
from ..storage.kv_store import MemoryKeyValueStore, SqliteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStore | None = None,
    session: KeyValueStore | None = None,
    blobs: BlobStore | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Any port left as None gets its default implementation: sqlite local
    storage, in-process session storage, and a blob directory under data_dir.
    """
    if settings is None:
        settings = get_settings()

    # Fail fast on a bad timezone name instead of on first render.
    tz = resolve_timezone(settings.timezone)

    if storage is None or blobs is None:
        _ensure_local_dirs(settings)
    if storage is None:
        storage = SqliteKeyValueStore(settings.storage_db_path)
    if session is None:
        session = MemoryKeyValueStore()
    if blobs is None:
        blobs = DirectoryBlobStore(settings.uploads_dir)

    state = AppState(
        settings=settings,
        storage=storage,
        session=session,
        auth=Authenticator(settings, session),
        task_store=TaskStore(storage),
        files=FileTree(storage, blobs, tz=tz),
        notes=NoteStore(storage),
        calendar_cache=CalendarIndexCache(tz),
        selected_date=today(tz),
    )

    state.user = state.auth.current_user()
    state.load_all()
    if state.user is not None:
        logger.info("Restored session for %s", state.user.user_id)
    return state
