# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the
enrollment service. Settings are loaded from environment variables with
sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from enrollment_service.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.catalog_service.url)
    'http://catalog-service'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Enrollment database configuration.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        url_override: Full connection URL, used verbatim when set.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
        populate_by_name=True,
    )

    user: str = "enrollment"
    password: SecretStr = SecretStr("enrollment_password")
    host: str = "enrollment-db"
    port: int = 5432
    database: str = "enrollment"
    url_override: str | None = Field(
        default=None,
        validation_alias="DB_URL",
    )
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        if self.url_override:
            return self.url_override
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def is_sqlite(self) -> bool:
        """Check whether the configured URL targets SQLite."""
        return self.url.startswith("sqlite")


class DirectoryServiceSettings(BaseSettings):
    """Student directory (user-service) configuration.

    Attributes:
        url: Base URL of the directory service.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRECTORY_SERVICE_",
        extra="ignore",
    )

    url: str = "http://user-service"
    timeout: float = 5.0


class CatalogServiceSettings(BaseSettings):
    """Course catalog (catalog-service) configuration.

    Attributes:
        url: Base URL of the catalog service.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SERVICE_",
        extra="ignore",
    )

    url: str = "http://catalog-service"
    timeout: float = 5.0


class CORSSettings(BaseSettings):
    """CORS configuration.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host address to bind.
        port: Port number to listen on.
        workers: Number of worker processes.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8083
    workers: int = 1


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        create_tables: Create missing tables at startup instead of relying
            on migrations.
        database: Database settings.
        directory_service: Student directory client settings.
        catalog_service: Course catalog client settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"
    create_tables: bool = False

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    directory_service: DirectoryServiceSettings = Field(default_factory=DirectoryServiceSettings)
    catalog_service: CatalogServiceSettings = Field(default_factory=CatalogServiceSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with development defaults.
        """
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "Debug mode must be disabled in production. Set DEBUG=false."
                )
            if self.database.is_sqlite:
                raise ValueError(
                    "SQLite is not supported in production. Set DB_URL to a PostgreSQL URL."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
