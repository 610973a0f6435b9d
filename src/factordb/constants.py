"""Shared constants — single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class DecodeErrorKind(StrEnum):
    """Why a response body could not be decoded."""

    INVALID_VALUE = "invalid_value"
    UNEXPECTED_SHAPE = "unexpected_shape"


class DisplayMode(StrEnum):
    """CLI output modes."""

    FULL = "full"
    FACTORS = "factors"
    UNIQUE_FACTORS = "unique_factors"
    JSON = "json"


# ── Service ──────────────────────────────────────────────

ENDPOINT = "http://factordb.com/api"
QUERY_PARAM = "query"

# ── Transport Defaults ───────────────────────────────────

DEFAULT_TIMEOUT_SECONDS = 30.0

# ── Retry Strategy ───────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 0.5
RETRY_MAX_WAIT = 4.0

# ── Misc ─────────────────────────────────────────────────

FACTOR_SEPARATOR = " "
ERROR_TRUNCATION_CHARS = 200
