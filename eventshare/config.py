from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventshare.schemas.share import (
    DEFAULT_BASE_MESSAGE,
    DEFAULT_HASHTAGS,
    GenerationConfig,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    base_url: str = Field(default="https://hiroshima-it-calendar.example.com")
    debug: bool = Field(default=False)

    # Share text (override config.yml)
    share_destination_url: str = Field(default="")
    share_timezone: str = Field(default="")


class ShareConfig:
    """Share text configuration from config.yml and environment."""

    def __init__(self, data: dict[str, Any], settings: "Settings") -> None:
        self.base_message: str = data.get("base_message", DEFAULT_BASE_MESSAGE)
        self.hashtags: list[str] = data.get("hashtags", list(DEFAULT_HASHTAGS))
        self.cache_ttl_seconds: int = data.get("cache_ttl_seconds", 300)
        self.cache_max_size: int = data.get("cache_max_size", 10)
        self.intent_url: str = data.get("intent_url", "https://twitter.com/intent/tweet")

        # Environment takes precedence over config.yml
        self.destination_url: str = settings.share_destination_url or data.get(
            "destination_url",
            settings.base_url,
        )
        self.timezone: str = settings.share_timezone or data.get("timezone", "Asia/Tokyo")

    def to_generation_config(self) -> GenerationConfig:
        """Build the immutable config consumed by the share text generator."""
        return GenerationConfig(
            destination_url=self.destination_url,
            hashtags=tuple(self.hashtags),
            base_message=self.base_message,
        )


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self) -> None:
        self.settings = Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path("config.yml")
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.share = ShareConfig(data.get("share", {}), self.settings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig()
