# src/organizer/auth/session.py

"""
Simulated sign-in gate.

There is no account database: sign-in compares against one configured demo
credential pair, sign-up only validates the form. A successful attempt stores
{"userId", "token"} in the session store so the next start restores it.
"""

from __future__ import annotations

import json
import logging
import secrets
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.ports import KeyValueStore

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)

SESSION_KEY = "currentUser"


class AuthError(ValueError):
    """Sign-in/sign-up rejected; the message is shown to the user as-is."""


@dataclass(frozen=True, slots=True)
class AuthUser:
    user_id: str
    token: str

    def to_dict(self) -> dict[str, str]:
        return {"userId": self.user_id, "token": self.token}

    @classmethod
    def from_dict(cls, raw: Any) -> AuthUser | None:
        if not isinstance(raw, dict):
            return None
        user_id = raw.get("userId")
        token = raw.get("token")
        if not isinstance(user_id, str) or not user_id or not isinstance(token, str):
            return None
        return cls(user_id=user_id, token=token)


class Authenticator:
    def __init__(self, settings: Any, session: KeyValueStore) -> None:
        self._email = str(getattr(settings, "demo_email", "user@example.com"))
        self._password = str(getattr(settings, "demo_password", "password123"))
        self._session = session

    def current_user(self) -> AuthUser | None:
        blob = self._session.load(SESSION_KEY)
        if not blob:
            return None
        try:
            return AuthUser.from_dict(json.loads(blob))
        except ValueError:
            logger.warning("Ignoring corrupt session marker")
            return None

    def _start_session(self, user_id: str) -> AuthUser:
        user = AuthUser(user_id=user_id, token=secrets.token_hex(16))
        self._session.save(SESSION_KEY, json.dumps(user.to_dict()))
        logger.info("Session started for %s", user_id)
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        email = (email or "").strip()
        if email == self._email and (password or "").strip() == self._password:
            return self._start_session(email)
        logger.info("Sign-in rejected for %r", email)
        raise AuthError("Invalid email or password.")

    def sign_up(self, email: str, password: str, confirm_password: str) -> AuthUser:
        if password != confirm_password:
            raise AuthError("Passwords do not match.")
        email = (email or "").strip()
        if not (email and (password or "").strip() and (confirm_password or "").strip()):
            raise AuthError("Please fill all sign-up fields.")
        # Nothing is registered anywhere; the new account only lives in this session.
        return self._start_session(email)

    def end_session(self) -> None:
        self._session.remove(SESSION_KEY)


def sign_in(state: AppState, email: str, password: str) -> AuthUser:
    user = state.auth.sign_in(email, password)
    state.user = user
    state.load_all()
    return user


def sign_up(state: AppState, email: str, password: str, confirm_password: str) -> AuthUser:
    user = state.auth.sign_up(email, password, confirm_password)
    state.user = user
    state.load_all()
    return user


def sign_out(state: AppState) -> None:
    """End the session and wipe tasks, notes and files from local storage."""
    who = state.user.user_id if state.user else None
    state.auth.end_session()
    state.user = None

    state.task_store.clear()
    state.tasks = []
    state.notes.clear()
    state.files.clear()
    state.current_folder = None
    logger.info("Signed out %s; local data cleared", who)
