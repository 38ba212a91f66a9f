"""
Ludo - Application Settings

Loads configuration from environment variables using Pydantic Settings.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from src.engine.base import AIDifficulty

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Rules
    continue_after_winner: bool = True
    ai_difficulty: AIDifficulty = AIDifficulty.MEDIUM

    # Feedback
    audio_enabled: bool = True
    haptics_enabled: bool = True

    # Supabase (profile statistics are disabled when unset)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}.")
        return level

    @property
    def profiles_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
