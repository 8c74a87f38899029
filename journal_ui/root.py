# journal_ui/root.py
"""
journal_ui/root.py

The root controller: who is logged in, which form is shown while logged out,
and which section (journal / messages) is open afterwards.

layout() is the single place that decides which views exist. Views that stop
being visible are unmounted there, which cancels their scope.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from journal_api.context import ClientContext
from journal_api.errors import ApiError, NetworkError
from journal_api.schemas import User
from journal_ui.login import LoginView
from journal_ui.messages_page import MessagesView
from journal_ui.my_journal import MyJournalView
from journal_ui.patient_notes import PatientNotesView
from journal_ui.record_viewer import PatientRecordViewer
from journal_ui.register import RegisterView
from journal_ui.scope import View

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


class Section(str, Enum):
    JOURNAL = "journal"
    MESSAGES = "messages"


class RootController:
    def __init__(self, ctx: ClientContext):
        self.ctx = ctx
        self.me: Optional[User] = None
        self.mode = Mode.LOGIN
        self.section = Section.JOURNAL
        self._views: Dict[str, View] = {}

    # -------------------------
    # Session
    # -------------------------
    def startup(self) -> None:
        self.me = self.ctx.session.current_user()

    async def restore(self) -> None:
        """startup(), then optionally ask the server whether the stored token is still good."""
        self.startup()
        if self.me is None or not self.ctx.settings.verify_session_on_startup:
            return
        try:
            user = await self.ctx.auth.me()
        except ApiError as e:
            logger.warning("Could not verify stored session, keeping it: %s", e)
            return
        if user is None:
            logger.info("Stored session was rejected by the server")
            self.ctx.session.clear_session()
            self.me = None
        else:
            self.ctx.session.save_user(user)
            self.me = user

    @property
    def is_clinical(self) -> bool:
        return self.me is not None and self.me.is_clinical

    def on_login(self, user: User) -> None:
        self.me = user
        self.section = Section.JOURNAL

    async def logout(self) -> None:
        try:
            await self.ctx.auth.logout()
        except NetworkError as e:
            logger.warning("Logout request failed, clearing local session anyway: %s", e)
        self.ctx.session.clear_session()
        self._unmount_all()
        self.me = None
        self.mode = Mode.LOGIN
        self.section = Section.JOURNAL

    # -------------------------
    # Navigation
    # -------------------------
    def show_register(self) -> None:
        self.mode = Mode.REGISTER

    def show_login(self) -> None:
        self.mode = Mode.LOGIN

    def select(self, section: Section) -> None:
        self.section = Section(section)

    def visible(self) -> List[str]:
        if self.me is None:
            return [RegisterView.name] if self.mode == Mode.REGISTER else [LoginView.name]
        if self.section == Section.MESSAGES:
            return [MessagesView.name]
        if self.is_clinical:
            return [PatientNotesView.name, PatientRecordViewer.name]
        return [MyJournalView.name]

    def layout(self) -> List[View]:
        wanted = self.visible()
        for name in list(self._views):
            if name not in wanted:
                self._views.pop(name).unmount()
        for name in wanted:
            if name not in self._views:
                self._views[name] = self._factories()[name]()
        return [self._views[name] for name in wanted]

    def _unmount_all(self) -> None:
        for view in self._views.values():
            view.unmount()
        self._views.clear()

    def _factories(self) -> Dict[str, Callable[[], View]]:
        ctx = self.ctx
        return {
            LoginView.name: lambda: LoginView(
                ctx.auth,
                ctx.session,
                on_login=self.on_login,
                on_show_register=self.show_register,
            ),
            RegisterView.name: lambda: RegisterView(
                ctx.auth,
                on_done=self.show_login,
                redirect_delay=ctx.settings.register_redirect_delay,
            ),
            MyJournalView.name: lambda: MyJournalView(ctx.journal),
            PatientNotesView.name: lambda: PatientNotesView(ctx.journal),
            PatientRecordViewer.name: lambda: PatientRecordViewer(ctx.journal),
            MessagesView.name: lambda: MessagesView(ctx.messages, self.me),
        }
