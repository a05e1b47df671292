"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Combat Configuration
    combat_seed: int | None = None  # Fixed seed for reproducible runs
    roster_file: str | None = None  # JSON roster; built-in roster when unset
    critical_die_sides: int = Field(default=20, ge=1)  # Critical on the top face only

    # Output Configuration
    simulation_runs: int = Field(default=0, ge=0)  # > 0 runs a silent batch instead of one narrated combat
    combat_log_file: str | None = None  # Write the structured combat log here as JSON


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
