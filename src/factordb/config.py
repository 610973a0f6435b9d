"""Environment-based client configuration."""

from __future__ import annotations

import logging

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from factordb import __version__
from factordb.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    RETRY_INITIAL_WAIT,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_WAIT,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Reads ``FACTORDB_*`` environment variables and an optional .env file.

    The API endpoint itself is a constant and not configurable.
    """

    # Transport
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    user_agent: str = f"factordb-python/{__version__}"

    # Retry (total attempts, including the first)
    max_attempts: int = Field(default=RETRY_MAX_ATTEMPTS, ge=1)
    retry_initial_wait: float = Field(default=RETRY_INITIAL_WAIT, ge=0)
    retry_max_wait: float = Field(default=RETRY_MAX_WAIT, ge=0)

    # Logging
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}"
            )
        return level

    @field_validator("retry_max_wait")
    @classmethod
    def _warn_inverted_wait(cls, v: float, info: ValidationInfo) -> float:
        initial = info.data.get("retry_initial_wait")
        if initial is not None and v < initial:
            logger.warning(
                "FACTORDB_RETRY_MAX_WAIT (%s) is below "
                "FACTORDB_RETRY_INITIAL_WAIT (%s); waits are capped at %s",
                v,
                initial,
                v,
            )
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FACTORDB_",
        extra="ignore",
    )
