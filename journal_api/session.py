# journal_api/session.py
"""
journal_api/session.py

The client session: an auth token plus a cached copy of the logged-in user.

Two storage entries, same as the browser client always used:
- "token": the raw token string
- "user":  the user object serialized as JSON (camelCase wire names)

The session is written at login (start), the user entry is refreshed when
the server confirms the token (save_user), and both are removed at logout
(clear_session). There is no expiry handling on the client side.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from journal_api.schemas import LoginResult, User

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionStore:
    def __init__(self, storage):
        self.storage = storage

    def token(self) -> Optional[str]:
        return self.storage.get_item(TOKEN_KEY) or None

    def current_user(self) -> Optional[User]:
        """
        The cached user, or None when nothing is stored or the entry is
        malformed (not JSON, or not a valid user).
        """
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return User.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.debug("Cached user entry is malformed, treating as logged out")
            return None

    def start(self, result: LoginResult) -> None:
        self.storage.set_item(TOKEN_KEY, result.token)
        self.storage.set_item(USER_KEY, result.user.model_dump_json(by_alias=True))
        logger.info("Session started for %s (%s)", result.user.username, result.user.role.value)

    def save_user(self, user: User) -> None:
        """Replace the cached user, keeping the token."""
        self.storage.set_item(USER_KEY, user.model_dump_json(by_alias=True))

    def clear_session(self) -> None:
        self.storage.remove_item(USER_KEY)
        self.storage.remove_item(TOKEN_KEY)
