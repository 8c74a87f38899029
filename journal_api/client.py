# journal_api/client.py
"""HTTP client for the journal backend: auth header, error normalisation, body decoding."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from journal_api.errors import NetworkError, RequestError, ResponseFormatError

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Auth"

T = TypeVar("T")


# ============================================================
# Response bodies
# ============================================================

@dataclass(frozen=True)
class Structured:
    value: Any


@dataclass(frozen=True)
class Raw:
    text: str


@dataclass(frozen=True)
class Empty:
    pass


Body = Union[Structured, Raw, Empty]


def decode_body(text: str) -> Body:
    """JSON if it parses, the raw text if it doesn't, Empty for no body at all."""
    if not text:
        return Empty()
    try:
        return Structured(json.loads(text))
    except json.JSONDecodeError:
        return Raw(text)


def unwrap(body: Body) -> Any:
    """Parsed object, raw string or None."""
    if isinstance(body, Structured):
        return body.value
    if isinstance(body, Raw):
        return body.text
    return None


def expect(body: Body, tp: Type[T]) -> T:
    """Validate a body against the shape the caller expects."""
    if not isinstance(body, Structured):
        kind = "an empty body" if isinstance(body, Empty) else "a non-JSON body"
        raise ResponseFormatError(f"Unexpected response from server: got {kind}")
    try:
        return TypeAdapter(tp).validate_python(body.value)
    except ValidationError as e:
        logger.warning("Response did not match %s: %s", getattr(tp, "__name__", tp), e)
        raise ResponseFormatError("Unexpected response from server") from e


# ============================================================
# Client
# ============================================================

class ApiClient:
    """
    One HTTP attempt per call. No retry, no caching, and no timeout unless
    one is configured.

    The token is read from the session store on every call, so a login or
    logout is picked up immediately.
    """

    def __init__(
        self,
        base_url: str,
        session,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self.transport = transport

    def _headers(self, headers: Optional[Dict[str, str]], auth: bool) -> Dict[str, str]:
        merged = dict(headers or {})
        token = self.session.token() if auth else None
        if token:
            merged[AUTH_HEADER] = token
        return merged

    async def fetch(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        auth: bool = True,
    ) -> Body:
        logger.debug("%s %s", method, path)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method, path, json=json, headers=self._headers(headers, auth)
                )
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise NetworkError(str(e)) from e

        if not response.is_success:
            logger.warning("%s %s -> %s", method, path, response.status_code)
            raise RequestError(response.text, status_code=response.status_code)

        return decode_body(response.text)

    async def request(self, path: str, method: str = "GET", **options) -> Any:
        """Same as fetch, but returns the parsed object, raw string or None."""
        return unwrap(await self.fetch(path, method, **options))
