"""
Application configuration loaded from environment variables.

All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings are loaded from environment variables with the same name.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Downstream services
    camara_comercio_url: str = Field(
        default="http://localhost:8081",
        description="Base URL of the Camara de Comercio registry service",
    )
    bancolombia_url: str = Field(
        default="http://localhost:8082",
        description="Base URL of the Bancolombia restrictions service",
    )
    datacredito_url: str = Field(
        default="http://localhost:8083",
        description="Base URL of the DataCredito rating service",
    )
    superintendencia_url: str = Field(
        default="http://localhost:8084",
        description="Base URL of the Superintendencia reports service",
    )
    gateway_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to each downstream request",
    )

    # Blocking work
    blocking_pool_size: int | None = Field(
        default=None,
        ge=1,
        description="Worker threads for blocking calls (default: 10 per CPU)",
    )

    # Server
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed error messages"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once at startup and cached for subsequent calls.
    This ensures consistent configuration across the application lifecycle.
    """
    return Settings()
