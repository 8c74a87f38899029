# journal_ui/messages_page.py
from __future__ import annotations

from typing import List, Optional

from journal_api.errors import ApiError
from journal_api.messages import MessageApi
from journal_api.schemas import Contact, Message, Role, SendMessage, User
from journal_ui.scope import View, error_text

NO_MESSAGES = "No messages yet."
PICK_CONTACT = "Pick a contact on the left to see your messages."


class MessagesView(View):
    """
    Two-party messaging. The contact list comes from the server, which decides
    who the current role may write to; the client does no filtering.
    """

    name = "messages"

    def __init__(self, messages: MessageApi, me: User):
        super().__init__()
        self.api = messages
        self.me = me
        self.contacts: List[Contact] = []
        self.selected: Optional[Contact] = None
        self.thread: List[Message] = []
        self.text = ""
        self.error = ""
        self.loading_thread = False

    @property
    def hint(self) -> str:
        if self.me.role == Role.PATIENT:
            return "You can write to doctors and staff."
        return "You can write to patients."

    def is_own(self, message: Message) -> bool:
        return message.sender_id == self.me.id

    async def mount(self) -> None:
        if self.mounted:
            return
        await super().mount()
        await self.load_contacts()

    async def load_contacts(self) -> None:
        self.error = ""
        try:
            contacts = await self.api.get_contacts()
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Could not load contacts")
            return
        if self.alive:
            self.contacts = contacts

    async def open_thread(self, contact: Contact) -> None:
        self.selected = contact
        self.thread = []
        self.error = ""
        self.loading_thread = True
        try:
            thread = await self.api.get_thread(contact.id)
        except ApiError as e:
            if self.alive and self.selected is contact:
                self.error = error_text(e, "Could not load messages")
                self.loading_thread = False
            return
        if self.alive and self.selected is contact:
            self.thread = thread
            self.loading_thread = False

    async def send(self) -> None:
        content = self.text.strip()
        if self.selected is None or not content:
            return
        self.error = ""
        try:
            sent = await self.api.send(SendMessage(receiver_id=self.selected.id, content=content))
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Could not send message")
            return
        if self.alive:
            self.thread = [*self.thread, sent]
            self.text = ""
