"""Centralized runtime settings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """Supported logging formats."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Configuration loaded from FEEDBACK_* env vars and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDBACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    api_base_url: str = "http://localhost:5000"
    api_token: str = ""
    api_timeout_s: Annotated[float, Field(gt=0.0)] = 20.0
    api_max_retries: Annotated[int, Field(ge=0)] = 3
    api_backoff_s: Annotated[float, Field(ge=0.0)] = 2.0
    api_page_size: Annotated[int, Field(ge=1, le=500)] = 50

    positive_threshold: Annotated[float, Field(ge=-1.0, le=1.0)] = 0.3
    negative_threshold: Annotated[float, Field(ge=-1.0, le=1.0)] = -0.3
    daily_window_days: Annotated[int, Field(ge=1)] = 30

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if self.negative_threshold > self.positive_threshold:
            raise ValueError("negative_threshold must not exceed positive_threshold")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
