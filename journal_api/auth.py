# journal_api/auth.py
"""Auth endpoints: login, register, me, logout."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from journal_api.client import ApiClient, expect
from journal_api.errors import RequestError
from journal_api.schemas import LoginResult, RegisteredUser, RegisterRequest, User

logger = logging.getLogger(__name__)


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, username: str, password: str) -> LoginResult:
        body = await self.client.fetch(
            "/api/auth/login",
            "POST",
            json={"username": username, "password": password},
            auth=False,
        )
        return expect(body, LoginResult)

    async def register(self, payload: Union[RegisterRequest, Dict[str, Any]]) -> RegisteredUser:
        if not isinstance(payload, RegisterRequest):
            payload = RegisterRequest.model_validate(payload)
        body = await self.client.fetch(
            "/api/auth/register",
            "POST",
            json=payload.model_dump(mode="json", by_alias=True),
            auth=False,
        )
        return expect(body, RegisteredUser)

    async def me(self) -> Optional[User]:
        """
        The user behind the stored token, or None.

        Unlike every other call this never surfaces a non-success status:
        a missing, expired or revoked token all come back as None.
        """
        if not self.client.session.token():
            return None
        try:
            body = await self.client.fetch("/api/auth/me")
        except RequestError as e:
            logger.debug("me() rejected (%s)", e.status_code)
            return None
        return expect(body, User)

    async def logout(self) -> None:
        """Revoke the token server-side. Failures are logged, never raised."""
        if not self.client.session.token():
            return
        try:
            await self.client.fetch("/api/auth/logout", "POST")
        except RequestError as e:
            logger.warning("Logout was not acknowledged by the server (%s)", e.status_code)
