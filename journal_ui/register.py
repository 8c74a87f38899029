# journal_ui/register.py
from __future__ import annotations

import asyncio
from typing import Callable, Optional

from journal_api.auth import AuthApi
from journal_api.errors import ApiError
from journal_api.schemas import ROLES, RegisterRequest, Role
from journal_ui.scope import View, error_text

ACCOUNT_CREATED = "Account created! You can log in now."


class RegisterView(View):
    name = "register"
    roles = ROLES

    def __init__(
        self,
        auth: AuthApi,
        on_done: Optional[Callable[[], None]] = None,
        redirect_delay: float = 0.8,
    ):
        super().__init__()
        self.auth = auth
        self.on_done = on_done
        self.redirect_delay = redirect_delay
        self.username = ""
        self.password = ""
        self.role = Role.PATIENT.value
        self.error = ""
        self.ok = ""

    async def submit(self) -> None:
        self.error = ""
        self.ok = ""
        payload = RegisterRequest(username=self.username, password=self.password, role=Role(self.role))
        try:
            await self.auth.register(payload)
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Registration failed")
            return
        if not self.alive:
            return
        self.ok = ACCOUNT_CREATED
        # back to login after a short pause so the confirmation is readable
        await asyncio.sleep(self.redirect_delay)
        if self.alive:
            self.back()

    def back(self) -> None:
        if self.on_done:
            self.on_done()
