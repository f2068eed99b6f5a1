"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="A2UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Protocol
    protocol_version: str = Field(default="v0.9", description="Expected envelope version")
    require_version: bool = Field(
        default=False, description="Reject envelopes without a version field"
    )

    # Surfaces
    auto_create_surfaces: bool = Field(
        default=False, description="Create unknown surfaces on first update instead of rejecting"
    )

    # Wire limits
    max_message_size: int = Field(default=1_048_576, gt=0, description="Max raw message bytes")
    max_json_depth: int = Field(default=64, gt=0, description="Max JSON nesting depth")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
