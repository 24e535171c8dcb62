"""Configuration settings for caching_map, loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CachingMapSettings(BaseSettings):
    """Settings for the logging that accompanies CachingMap instances."""

    model_config = SettingsConfigDict(
        env_prefix="CACHING_MAP_",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log format (json or console)",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> CachingMapSettings:
    """Return cached settings instance."""

    return CachingMapSettings()
