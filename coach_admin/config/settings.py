"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations

Mock mode enables local development without a data file on disk.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like cors_origins), use comma-separated values in env.
    """

    # API Configuration
    api_title: str = "Coach Admin API"

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface the API server binds to"
    )
    port: int = Field(
        default=3001,
        description="Port the API server listens on"
    )

    # Storage
    data_file: str = Field(
        default="data/coaches.json",
        description="JSON file holding the coach collection. Its directory is created on demand."
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Keep coaches in memory instead of on disk. Data is lost on restart."
    )
    serialize_writes: bool = Field(
        default=True,
        description="Serialize mutations within this process. Does not coordinate separate processes."
    )

    # Client
    coach_api_url: str = Field(
        default="http://localhost:3001",
        description="Base URL the client uses to reach the coach API"
    )
    client_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for client requests"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. * allows any origin."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def data_path(self) -> Path:
        return Path(self.data_file)

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def validate_configuration(self) -> list[str]:
        """
        Return a list of configuration problems.

        This is separate from Pydantic validation because a bad value
        here shouldn't stop the process from starting; it is reported
        at startup and by the readiness check instead.
        """
        problems = []

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        if not 0 < self.port < 65536:
            problems.append("PORT must be between 1 and 65535")

        if not self.storage_mock_mode and self.data_path.is_dir():
            problems.append("DATA_FILE points at a directory")

        if self.client_timeout_seconds <= 0:
            problems.append("CLIENT_TIMEOUT_SECONDS must be positive")

        return problems


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()
