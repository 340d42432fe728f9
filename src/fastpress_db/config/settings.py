"""
Configuration management for fastpress_db.

This module provides environment-based configuration using Pydantic
BaseSettings. Connection attributes may be supplied through FASTPRESS_*
environment variables or a .env file and are validated into a
ConnectionConfig on demand.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fastpress_db.config.schema import ConnectionConfig, validate_connection_config
from fastpress_db.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("FASTPRESS_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the FASTPRESS_ prefix.
    For example, FASTPRESS_DATABASE_HOST overrides database_host.
    Connection fields default to None; they are only required once
    connection_config() is called.
    """

    log_level: str = Field(default="INFO", description="Logging level")

    database_host: Optional[str] = Field(default=None, description="Database host")
    database_port: Optional[int] = Field(default=None, description="Database port")
    database_name: Optional[str] = Field(default=None, description="Database name")
    database_charset: Optional[str] = Field(
        default=None, description="Connection charset"
    )
    database_user: Optional[str] = Field(default=None, description="Database user")
    database_password: Optional[str] = Field(
        default=None, description="Database password"
    )

    model_config = SettingsConfigDict(
        env_prefix="FASTPRESS_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def connection_config(self) -> ConnectionConfig:
        """
        Assemble and validate the connection attributes.

        Returns:
            Validated ConnectionConfig

        Raises:
            ConfigurationError: If any connection attribute is unset or invalid
        """
        raw = {
            "host": self.database_host,
            "port": self.database_port,
            "database": self.database_name,
            "charset": self.database_charset,
            "username": self.database_user,
            "password": self.database_password,
        }
        unset = [key for key, value in raw.items() if value is None]
        if unset:
            logger.error("configuration.database.incomplete", missing=unset)
            raise ConfigurationError(
                "Missing required connection settings: "
                + ", ".join(f"FASTPRESS_{_ENV_NAMES[key]}" for key in unset)
            )
        return validate_connection_config(raw)


_ENV_NAMES = {
    "host": "DATABASE_HOST",
    "port": "DATABASE_PORT",
    "database": "DATABASE_NAME",
    "charset": "DATABASE_CHARSET",
    "username": "DATABASE_USER",
    "password": "DATABASE_PASSWORD",
}


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
