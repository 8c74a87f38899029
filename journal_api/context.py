# journal_api/context.py
"""
journal_api/context.py

Everything a view needs to talk to the backend, wired once and passed
explicitly: settings -> storage -> session -> client -> domain APIs.

open() is the startup step, close() is the teardown step (drops the session).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from journal_api.auth import AuthApi
from journal_api.client import ApiClient
from journal_api.config import Settings
from journal_api.journal import JournalApi
from journal_api.messages import MessageApi
from journal_api.session import SessionStore
from journal_api.storage import MemoryStorage


@dataclass
class ClientContext:
    settings: Settings
    session: SessionStore
    client: ApiClient
    auth: AuthApi
    journal: JournalApi
    messages: MessageApi

    @classmethod
    def open(
        cls,
        settings: Settings,
        storage=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ClientContext":
        # a context is one user's session; storage is never shared between contexts
        session = SessionStore(storage if storage is not None else MemoryStorage())
        client = ApiClient(
            settings.api_base_url,
            session,
            timeout=settings.request_timeout,
            transport=transport,
        )
        return cls(
            settings=settings,
            session=session,
            client=client,
            auth=AuthApi(client),
            journal=JournalApi(client),
            messages=MessageApi(client),
        )

    def close(self) -> None:
        self.session.clear_session()
