"""
ModulePush Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file into os.environ at module import time
# This ensures nested BaseSettings classes can read the values
_env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    # Try current working directory
    load_dotenv()


class UploadSettings(BaseSettings):
    """Remote code upload endpoint settings."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    url: str = Field(
        default="https://screeps.com/api/user/code",
        description="Endpoint receiving the module bundle",
    )
    branch: str = Field(default="default", description="Branch the modules are uploaded to")
    timeout_seconds: float = Field(default=30.0, ge=1.0)


class WatcherSettings(BaseSettings):
    """File watcher configuration settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    flush_interval_ms: int = Field(default=200, ge=10, le=60000)
    extension: str = Field(default=".js", description="Script file extension to watch")
    recursive: bool = Field(default=False)

    @field_validator("extension", mode="before")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Accept extensions with or without the leading dot."""
        v = v.strip()
        if v and not v.startswith("."):
            return f".{v}"
        return v


class CredentialSettings(BaseSettings):
    """Fallback credentials read from the environment."""

    model_config = SettingsConfigDict(env_prefix="MODULEPUSH_")

    email: str = Field(default="")
    password: str = Field(default="")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="console")  # "json" or "console"

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="ModulePush")
    app_version: str = Field(default="0.1.0")

    # Sub-settings
    upload: UploadSettings = Field(default_factory=UploadSettings)
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    credentials: CredentialSettings = Field(default_factory=CredentialSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def flush_interval(self) -> float:
        """Flush interval in seconds."""
        return self.watcher.flush_interval_ms / 1000.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings.
    """
    return Settings()
