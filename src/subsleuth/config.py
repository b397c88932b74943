from __future__ import annotations

import os
from pathlib import Path

from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import SettingsError

APP_NAME = "subsleuth"


def default_cache_dir() -> Path:
    base = os.getenv("XDG_CACHE_HOME") or Path.home() / ".cache"
    return Path(base) / APP_NAME


def default_config_dir() -> Path:
    return Path(os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config")


class Settings(BaseSettings):
    twitch_cli_path: str | None = Field(
        default=None, validation_alias="EVENTSUB_TWITCH_CLI_PATH"
    )
    cache_dir: Path = Field(
        default_factory=default_cache_dir, validation_alias="SUBSLEUTH_CACHE_DIR"
    )
    config_dir: Path = Field(
        default_factory=default_config_dir, validation_alias="SUBSLEUTH_CONFIG_DIR"
    )
    log_level: str = Field(default="DEBUG", validation_alias="SUBSLEUTH_LOG_LEVEL")

    @field_validator("twitch_cli_path", mode="before")
    @classmethod
    def _parse_cli_path(cls, v: str | None) -> str | None:
        if v == "":
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.upper()
        logger.level(level)
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def log_path(self) -> Path:
        return self.cache_dir / f"{APP_NAME}.log"


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise SettingsError(error=exc) from exc
