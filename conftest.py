import json
from typing import Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from journal_api.config import Settings
from journal_api.context import ClientContext
from journal_api.storage import MemoryStorage


class FakeBackend:
    """
    Canned responses keyed by (method, decoded path), served through
    httpx.MockTransport. Every request is kept in .calls for assertions.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, str, Optional[Callable]]] = {}
        self.calls: List[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, payload=None, text: str = "", before=None):
        body = json.dumps(payload) if payload is not None else text
        self.routes[(method, path)] = (status, body, before)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="Not found")
        status, body, before = route
        if before is not None:
            before(request)
        return httpx.Response(status, text=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self):
        return json.loads(self.calls[-1].content)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def ctx(backend, storage):
    settings = Settings(api_base_url="http://journal.test", register_redirect_delay=0)
    return ClientContext.open(settings, storage=storage, transport=backend.transport())


@pytest.fixture
def login_as(ctx):
    """Put a token + cached user in the session, as a successful login would."""
    from journal_api.schemas import LoginResult

    def _login(user: dict, token: str = "tok-123"):
        result = LoginResult.model_validate({"token": token, "user": user})
        ctx.session.start(result)
        return result.user

    return _login
