# tests/conftest.py

from __future__ import annotations

import datetime as dt
from pathlib import Path
from types import SimpleNamespace

import pytest

from organizer.auth.session import sign_in
from organizer.cli.bootstrap import create_initial_state
from organizer.core.state import AppState
from organizer.storage.kv_store import MemoryKeyValueStore

from .fakes import FakeBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command layer.

    A SimpleNamespace rather than the real config keeps tests independent of
    the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="The Organizer",
        timezone="Australia/Sydney",
        calendar_min_cells=35,
        demo_email="user@example.com",
        demo_password="password123",
        data_dir=tmp_path / "data",
        storage_db_path=tmp_path / "data" / "storage.sqlite3",
        uploads_dir=tmp_path / "data" / "uploads",
    )


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def state(settings: SimpleNamespace, storage: MemoryKeyValueStore, blobs: FakeBlobStore) -> AppState:
    """AppState wired with in-memory storage, nobody signed in."""
    st = create_initial_state(
        settings=settings,
        storage=storage,
        session=MemoryKeyValueStore(),
        blobs=blobs,
    )
    st.selected_date = dt.date(2025, 4, 15)
    return st


@pytest.fixture()
def signed_in_state(state: AppState) -> AppState:
    sign_in(state, "user@example.com", "password123")
    return state
