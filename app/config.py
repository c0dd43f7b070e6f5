"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Data-access settings with validation.
    Settings are loaded from LISTLY_* environment variables or a .env file.
    """

    app_name: str = Field(default="Listly", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )

    # Database settings
    database_url: str = Field(
        default="sqlite:///./listly.db",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_isolation_level: Optional[str] = Field(
        default=None,
        description="Transaction isolation level passed to the engine (e.g. SERIALIZABLE)",
    )
    db_pool_pre_ping: bool = Field(
        default=True, description="Test pooled connections before use"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    model_config = SettingsConfigDict(
        env_prefix="LISTLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("db_isolation_level", mode="before")
    @classmethod
    def validate_isolation_level(cls, v):
        """Normalize isolation level names to the form SQLAlchemy expects"""
        if isinstance(v, str):
            v = v.strip().upper().replace("-", " ").replace("_", " ")
            return v or None
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def get_settings(**overrides) -> Settings:
    """Build a Settings instance, optionally overriding individual values."""
    return Settings(**overrides)
