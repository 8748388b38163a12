'''
The single shared admin session, persisted to a local JSON file.
'''
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import Request
from pydantic import ValidationError

from ..common.config import Settings, settings
from ..common.logger import log
from ..models.token import SessionUser


class SessionStore:
    """
    Holds the one authenticated user. The persisted entry
    ({"username": ..., "loggedInAt": ...}) is the only authentication signal;
    it never expires on its own.
    """
    def __init__(self, path: str | Path, admin_username: str, admin_password: str):
        self.path = Path(path)
        self._admin_username = admin_username
        self._admin_password = admin_password
        self._user: Optional[SessionUser] = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "SessionStore":
        return cls(
            path=config.SESSION_FILE,
            admin_username=config.ADMIN_USERNAME,
            admin_password=config.ADMIN_PASSWORD,
        )

    def initialize(self) -> Optional[SessionUser]:
        """
        Reads the persisted session once. A missing file means logged out;
        an unreadable one is logged and also treated as logged out.
        """
        self._user = None
        if not self.path.exists():
            log.info("No persisted session found; starting logged out.")
            return None
        try:
            self._user = SessionUser.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            log.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None
        log.info(f"Restored session for '{self._user.username}' (logged in at {self._user.logged_in_at}).")
        return self._user

    @property
    def current_user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def _credentials_match(self, username: str, password: str) -> bool:
        username_ok = secrets.compare_digest(username.encode(), self._admin_username.encode())
        password_ok = secrets.compare_digest(password.encode(), self._admin_password.encode())
        return username_ok and password_ok

    def login(self, username: str, password: str) -> bool:
        """
        Starts a new session when the credentials match the configured admin pair.
        A new login replaces any previous session.
        """
        if not self._credentials_match(username, password):
            log.warning(f"Login failed for user: {username}")
            return False

        user = SessionUser(username=username, logged_in_at=datetime.now(timezone.utc))
        self.path.write_text(user.model_dump_json(by_alias=True), encoding="utf-8")
        self._user = user
        log.info(f"Login successful for user: {username}")
        return True

    def logout(self) -> None:
        if self._user is not None:
            log.info(f"Logging out user: {self._user.username}")
        self.path.unlink(missing_ok=True)
        self._user = None


def get_session_store(request: Request) -> SessionStore:
    """FastAPI dependency returning the store created by the app's lifespan."""
    store = getattr(request.app.state, "session_store", None)
    if store is None:
        log.error("Session store is not initialized. App lifespan may not have run.")
        raise RuntimeError("Session store is not available.")
    return store
