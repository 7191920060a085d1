"""
Configuration management for rrulekit.

Uses Pydantic Settings for type-safe environment variable loading.
Configured via .env file in project root.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    See .env.example for available options.
    """

    # Python & Application
    python_env: Literal["development", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8000,
        description="API server port"
    )
    api_reload: bool = Field(
        default=True,
        description="Enable auto-reload in development"
    )

    # RRULE handling
    legacy_interval_omission: bool = Field(
        default=False,
        description=(
            "Omit INTERVAL whenever it is greater than 1 (legacy behavior) "
            "instead of only when it equals the default of 1"
        )
    )
    max_rrule_length: int = Field(
        default=512,
        gt=0,
        description="Maximum accepted RRULE string length for API requests"
    )
    max_sessions: int = Field(
        default=1000,
        gt=0,
        description="Maximum number of concurrent editing sessions held in memory"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.python_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.python_env == "production"

    def configure_logging(self) -> None:
        """Apply log_level to the root logger."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        logging.getLogger().setLevel(self.log_level)

    def validate_production_config(self) -> None:
        """
        Validate configuration for production environment.

        Raises:
            ValueError: If production settings are invalid
        """
        if not self.is_production:
            return

        errors = []

        if self.api_reload:
            errors.append("API_RELOAD must be disabled in production.")

        if self.log_level == "DEBUG":
            errors.append("LOG_LEVEL=DEBUG is not allowed in production.")

        if errors:
            raise ValueError("Production configuration errors:\n- " + "\n- ".join(errors))


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This function is cached to ensure we only load settings once.
    Use this function throughout the application to access settings.

    Returns:
        Settings instance loaded from environment

    Example:
        >>> from rrulekit.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.legacy_interval_omission)
    """
    return Settings()
