# journal_api/messages.py
"""Messaging endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Union

from journal_api.client import ApiClient, expect
from journal_api.schemas import Contact, Message, SendMessage


class MessageApi:
    def __init__(self, client: ApiClient):
        self.client = client

    # Who the current user may write to. The server filters by role.
    async def get_contacts(self) -> List[Contact]:
        return expect(await self.client.fetch("/api/messages/contacts"), List[Contact])

    async def get_thread(self, other_id: int) -> List[Message]:
        """Full history with one counterpart, in the order the server returns it (oldest first)."""
        return expect(await self.client.fetch(f"/api/messages/thread/{other_id}"), List[Message])

    async def send(self, payload: Union[SendMessage, Dict[str, Any]]) -> Message:
        if not isinstance(payload, SendMessage):
            payload = SendMessage.model_validate(payload)
        body = await self.client.fetch(
            "/api/messages",
            "POST",
            json=payload.model_dump(by_alias=True),
        )
        return expect(body, Message)
