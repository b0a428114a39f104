"""Application settings loaded from the environment or .env via Pydantic."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.payload import DEFAULT_MAX_INFLATED_BYTES


logger = logging.getLogger(__name__)


class PulseSettings(BaseSettings):
    max_inflated_bytes: int = Field(default=DEFAULT_MAX_INFLATED_BYTES, gt=0)
    output_file: Path = Field(default=Path("pulse.json5"))
    output_format: Literal["json", "yaml"] = "json"

    model_config = SettingsConfigDict(
        env_prefix="DGLAB_PULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("output_file", mode="before")
    @classmethod
    def _expand_output_file(cls, value: Path) -> Path:
        return Path(value).expanduser()


_settings: Optional[PulseSettings] = None


def get_settings() -> PulseSettings:
    global _settings
    if _settings is None:
        if not Path(".env").exists():
            logger.debug("No .env file found in %s; using environment and defaults", Path.cwd())
        _settings = PulseSettings()
    return _settings


def max_inflated_bytes() -> int:
    return get_settings().max_inflated_bytes


def default_output_file() -> Path:
    return get_settings().output_file


def reset_settings_cache() -> None:
    global _settings
    _settings = None
