# journal_ui/scope.py
"""
journal_ui/scope.py

Shared plumbing for every view controller:

- ViewScope: the lifetime of one mounted view. unmount() cancels it, and any
  request still in flight finishes but its result is thrown away.
- FetchState: idle -> loading -> ready | failed. A new trigger starts over
  at loading and forgets the previous data/error.
- error_text(): the message to show inline for a caught error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from journal_api.errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewScope:
    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class FetchState(Generic[T]):
    status: Status = Status.IDLE
    data: Optional[T] = None
    error: str = ""

    @property
    def loading(self) -> bool:
        return self.status == Status.LOADING

    def start(self) -> None:
        self.status = Status.LOADING
        self.data = None
        self.error = ""

    def succeed(self, data: T) -> None:
        self.status = Status.READY
        self.data = data

    def fail(self, message: str) -> None:
        self.status = Status.FAILED
        self.error = message


def error_text(exc: BaseException, fallback: str) -> str:
    return str(exc) or fallback


class View:
    """Base for the page controllers. Subclasses fetch in mount() and in their actions."""

    name = "view"

    def __init__(self):
        self.scope = ViewScope()
        self.mounted = False

    @property
    def alive(self) -> bool:
        return not self.scope.cancelled

    async def mount(self) -> None:
        self.mounted = True

    def unmount(self) -> None:
        self.scope.cancel()

    async def _load(self, state: FetchState, call: Callable[[], Awaitable[T]], fallback: str) -> None:
        state.start()
        try:
            data = await call()
        except ApiError as e:
            if self.alive:
                state.fail(error_text(e, fallback))
            else:
                logger.debug("%s: dropped error after unmount", self.name)
            return
        if self.alive:
            state.succeed(data)
        else:
            logger.debug("%s: dropped response after unmount", self.name)
