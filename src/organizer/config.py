# src/organizer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every key has a default.
- The calendar timezone is a configuration point (default: Australia/Sydney).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "ORGANIZER"

DEFAULT_TIMEZONE = "Australia/Sydney"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    console_enabled: bool

    # ---- Calendar ----
    timezone: str
    calendar_min_cells: int

    # ---- Simulated sign-in ----
    demo_email: str
    demo_password: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_db_path: Path
    uploads_dir: Path
    log_dir: Optional[Path] = None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "The Organizer").strip() or "The Organizer"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        timezone = _env(_k("TIMEZONE"), DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE
        # 35 = five display rows; six-row months always grow to 42.
        calendar_min_cells = _env_int(_k("CALENDAR_MIN_CELLS"), 35)
        if calendar_min_cells not in (35, 42):
            calendar_min_cells = 35

        demo_email = _env(_k("DEMO_EMAIL"), "user@example.com").strip()
        demo_password = _env(_k("DEMO_PASSWORD"), "password123").strip()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/organizer"))
        storage_db_path = _env_path(_k("STORAGE_DB_PATH"), data_dir / "storage.sqlite3")
        uploads_dir = _env_path(_k("UPLOADS_DIR"), data_dir / "uploads")
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            timezone=timezone,
            calendar_min_cells=calendar_min_cells,
            demo_email=demo_email,
            demo_password=demo_password,
            data_dir=data_dir,
            storage_db_path=storage_db_path,
            uploads_dir=uploads_dir,
            log_dir=log_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
