# journal_ui/login.py
from __future__ import annotations

from typing import Callable, Optional

from journal_api.auth import AuthApi
from journal_api.errors import ApiError
from journal_api.schemas import User
from journal_api.session import SessionStore
from journal_ui.scope import View, error_text


class LoginView(View):
    name = "login"

    def __init__(
        self,
        auth: AuthApi,
        session: SessionStore,
        on_login: Optional[Callable[[User], None]] = None,
        on_show_register: Optional[Callable[[], None]] = None,
    ):
        super().__init__()
        self.auth = auth
        self.session = session
        self.on_login = on_login
        self.on_show_register = on_show_register
        self.username = ""
        self.password = ""
        self.error = ""

    async def submit(self) -> None:
        self.error = ""
        try:
            result = await self.auth.login(self.username, self.password)
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Login failed")
            return
        # The session is stored even if the form went away meanwhile.
        self.session.start(result)
        if self.alive and self.on_login:
            self.on_login(result.user)

    def show_register(self) -> None:
        if self.on_show_register:
            self.on_show_register()
