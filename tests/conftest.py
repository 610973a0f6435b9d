"""Shared test fixtures — stubbed transports, fast retry settings."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from factordb.config import Settings

Handler = Callable[[httpx.Request], httpx.Response]


def wire(
    id_: Any,
    status: str,
    factors: list[list[Any]],
) -> dict[str, Any]:
    """Build a response body in FactorDB's wire format."""
    return {"id": id_, "status": status, "factors": factors}


# Bodies as the live service returns them for a few small numbers
RESPONSES: dict[str, dict[str, Any]] = {
    "15": wire("15", "FF", [["3", 1], ["5", 1]]),
    "17": wire("17", "P", [["17", 1]]),
    "42": wire("42", "FF", [["2", 1], ["3", 1], ["7", 1]]),
    "100": wire("100", "FF", [["2", 2], ["5", 2]]),
    "0": wire(-1, "Zero", [["0", 1]]),
    "1": wire(-1, "Unit", []),
}


def factordb_handler(request: httpx.Request) -> httpx.Response:
    """Serve RESPONSES by query; unknown queries get a 404."""
    query = request.url.params.get("query", "")
    body = RESPONSES.get(query)
    if body is None:
        return httpx.Response(404, text="Invalid number")
    return httpx.Response(200, text=json.dumps(body))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FACTORDB_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("FACTORDB_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> Settings:
    """Settings with retries enabled but no backoff sleeps."""
    return Settings(
        max_attempts=3,
        retry_initial_wait=0,
        retry_max_wait=0,
    )
