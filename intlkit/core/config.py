"""Library configuration via Pydantic Settings.

Reads ``INTL_*`` environment variables (and an optional .env file) and
validates them at startup.  Use ``get_settings()`` to obtain a cached
singleton.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated i18n settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Optional (with defaults) ----------------------------------------
    MESSAGES_DIR: str = "messages"
    DEFAULT_LANG: str = "en"
    FALLBACK_LANG: str = "en"
    LOG_LEVEL: str = "INFO"
    CHECK_LOCALE_CODES: bool = True

    # --- Validators ------------------------------------------------------
    @field_validator("DEFAULT_LANG", "FALLBACK_LANG")
    @classmethod
    def _validate_lang(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Language code must not be empty")
        if any(c in v for c in "/\\") or any(c.isspace() for c in v):
            raise ValueError("Language code must not contain path separators or whitespace")
        return v

    @field_validator("MESSAGES_DIR")
    @classmethod
    def _validate_messages_dir(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("MESSAGES_DIR must not be empty")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings singleton."""
    return Settings()
