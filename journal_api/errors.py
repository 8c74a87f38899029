# journal_api/errors.py
"""
Error types raised by the API client.

Every view catches ApiError at its own boundary and shows str(exc) inline.
"""

from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    """Base class for everything the client raises."""


class RequestError(ApiError):
    """Non-success HTTP status. The message is the raw response body, verbatim."""

    def __init__(self, body: str, status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(body)

    def __str__(self) -> str:
        return self.body


class NetworkError(ApiError):
    """The request never produced a response (connection refused, DNS, ...)."""


class ResponseFormatError(ApiError):
    """Structured data was expected but the body was text, empty or invalid."""
