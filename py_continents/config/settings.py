"""Configuration management."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .map_sizes import MapSize


class Settings(BaseSettings):
    """Settings pulled from ``PY_CONTINENTS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_CONTINENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "console"] = Field(default="json", description="Log renderer")

    # Generation
    default_map_size: MapSize = Field(default=MapSize.STANDARD, description="Size class used when none is given")
    default_seed: Optional[str] = Field(default=None, description="Seed used when none is given")


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
