"""Library configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

KeyStyle = Literal["snake", "camel"]


class Settings(BaseSettings):
    """Pagination settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQLPAGINATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Pagination
    default_per_page: int = 10
    max_per_page: int = 100  # upper bound for HTTP query parameters
    key_style: KeyStyle = "snake"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
