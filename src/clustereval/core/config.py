"""Application configuration for clustereval.

Settings are loaded from environment variables (and an optional ``.env``
file) through pydantic-settings. Each group has its own env prefix and a
cached accessor.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clustereval.utils import get_logger, setup_logging

logger = get_logger(__name__)


class ValidationSettings(BaseSettings):
    """Cluster validation behaviour."""

    log_contingency_table: bool = Field(
        default=False,
        description="Dump the cluster x class contingency table at DEBUG level",
    )
    metric_precision: int | None = Field(
        default=None,
        description="Round reported purity/NMI to this many decimals (None = full precision)",
        ge=0,
        le=15,
    )

    model_config = SettingsConfigDict(
        env_prefix="VALIDATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(default="clustereval", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: str | None = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v_upper


@lru_cache
def get_app_settings() -> AppSettings:
    """Get cached application settings instance."""
    return AppSettings()


@lru_cache
def get_validation_settings() -> ValidationSettings:
    """Get cached validation settings instance."""
    return ValidationSettings()


def reload_all_settings() -> None:
    """Clear all settings caches to reload from environment."""
    get_app_settings.cache_clear()
    get_validation_settings.cache_clear()


def configure_logging(settings: AppSettings | None = None) -> None:
    """Set up logging sinks from application settings."""
    settings = settings or get_app_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    logger.info(f"Logging configured for {settings.app_name} v{settings.app_version}")
