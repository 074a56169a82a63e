"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_LSTC_URL = (
    "https://www.ls-tc.de/_rpc/json/instrument/chart/dataForInstrument"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Override via environment variables (prefixed with QX_) or a .env file.

    Examples:
        QX_SQLITE_PATH=/var/lib/quantalox/qx.db
        QX_LOG_LEVEL=DEBUG
        QX_HTTP_READ_TIMEOUT=60
    """

    model_config = SettingsConfigDict(
        env_prefix="QX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Quantalox"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False, description="Log at DEBUG regardless of log_level")

    # Database
    sqlite_path: Path = Field(
        default=Path.home() / ".quantalox" / "quantalox.db",
        description="SQLite database file path",
    )

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # HTTP
    http_connect_timeout: int = Field(default=10, ge=1)
    http_read_timeout: int = Field(default=30, ge=1)
    lstc_base_url: str = Field(
        default=DEFAULT_LSTC_URL,
        description="Chart data endpoint for the ls-tc.de gateway",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
