# journal_api/config.py
"""Client configuration using Pydantic settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from JOURNAL_* environment variables (or .env)."""

    # Backend
    api_base_url: str = "http://localhost:8080"
    request_timeout: Optional[float] = None  # None -> wait for the server

    # Session
    verify_session_on_startup: bool = False

    # UI
    register_redirect_delay: float = 0.8

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
