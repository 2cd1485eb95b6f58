# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "ORGANIZER_APP_NAME": "App display name (default: The Organizer).",
    "ORGANIZER_LOG_LEVEL": "Console logging level (default: INFO).",
    "ORGANIZER_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Calendar
    "ORGANIZER_TIMEZONE": "IANA zone used for date keys and 'today' (default: Australia/Sydney).",
    "ORGANIZER_CALENDAR_MIN_CELLS": "Month grid size, 35 or 42 (six-row months always use 42).",
    # Simulated sign-in
    "ORGANIZER_DEMO_EMAIL": "Email accepted by /signin (default: user@example.com).",
    "ORGANIZER_DEMO_PASSWORD": "Password accepted by /signin (default: password123).",
    # Paths (gitignored)
    "ORGANIZER_DATA_DIR": "Local data directory (default: .local/organizer).",
    "ORGANIZER_STORAGE_DB_PATH": "Key/value SQLite path (default: <data_dir>/storage.sqlite3).",
    "ORGANIZER_UPLOADS_DIR": "Uploaded file contents (default: <data_dir>/uploads).",
    "ORGANIZER_LOG_DIR": "Log file directory (default: <data_dir>).",
}
