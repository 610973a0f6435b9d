"""Exception hierarchy and error classification.

Every failure that starts from network input ends up as a
``FactorDbError`` subclass:

- ``RequestError``: the transport failed or the body was not JSON
- ``InvalidNumber``: the service answered with a non-success status
- ``DecodeError``: the JSON was well formed but did not match the
  expected shape or value types

Classification decides which of them are worth retrying.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import httpx

from factordb.constants import ERROR_TRUNCATION_CHARS, DecodeErrorKind


class FactorDbError(Exception):
    """Base class for every error raised by this package."""


class RequestError(FactorDbError):
    """The request could not be completed or its body was unreadable."""


class InvalidNumber(FactorDbError):
    """The service rejected the query with a non-success HTTP status."""

    def __init__(self, number: str, status_code: int) -> None:
        super().__init__(
            f"Invalid number {number!r} (HTTP {status_code})"
        )
        self.number = number
        self.status_code = status_code


class DecodeError(FactorDbError, ValueError):
    """A response field did not match any accepted shape.

    Subclasses ``ValueError`` so pydantic validators can raise it
    directly; ``decode_number`` unwraps it again from the
    ``ValidationError``.
    """

    def __init__(
        self,
        kind: DecodeErrorKind,
        field: str,
        value: Any,
        reason: str = "",
    ) -> None:
        shown = repr(value)[:ERROR_TRUNCATION_CHARS]
        message = f"Decode error ({kind}) in field {field!r}: {shown}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.value = value
        self.reason = reason

    def at(self, field: str) -> DecodeError:
        """Return a copy of this error relocated to ``field``."""
        return DecodeError(self.kind, field, self.value, self.reason)


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors — retryable
    SERVER = "server"  # 500, 502, 503 — retryable
    TIMEOUT = "timeout"  # deadline exceeded — retryable with backoff
    CLIENT = "client"  # 400, 404 — do NOT retry
    UNKNOWN = "unknown"  # unclassified or undecodable — do NOT retry


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error to determine handling strategy.

    Checks structured attributes first (status_code), then the
    wrapped transport exception, and only then falls back to string
    matching for untyped exceptions.
    """
    if isinstance(error, DecodeError):
        return ErrorClass.UNKNOWN

    # 1. Structured status_code attribute (InvalidNumber)
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER
        # 1xx/3xx: never string-match, the message holds the query text
        return ErrorClass.UNKNOWN

    # 2. RequestError wraps the httpx exception as its cause
    if isinstance(error, RequestError) and error.__cause__ is not None:
        return classify_error(error.__cause__)

    # 3. Timeout types
    if isinstance(
        error,
        (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException),
    ):
        return ErrorClass.TIMEOUT
    if isinstance(error, httpx.TransportError):
        return ErrorClass.TRANSIENT

    # 4. String matching fallback
    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
    ErrorClass.TIMEOUT,
})


def is_retryable(error: BaseException) -> bool:
    """Return True if the error category supports retry."""
    return classify_error(error) in _RETRYABLE
