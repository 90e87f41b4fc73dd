"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from ``GALAXY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GALAXY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="plain", description="Logging format (plain or json)"
    )

    # Map Generation Configuration
    default_map_size: int = Field(
        default=80, ge=0, description="Default number of territories"
    )
    default_layout: str = Field(default="organic", description="Default galaxy layout")
    default_num_players: int = Field(
        default=1, ge=1, description="Default number of players"
    )
    max_map_size: int = Field(
        default=1000,
        ge=1,
        description="Largest territory count the CLI accepts (relaxation is O(n^2))",
    )


settings = Settings()
