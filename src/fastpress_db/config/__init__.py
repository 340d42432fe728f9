"""Configuration management for fastpress_db.

Usage:
    >>> from fastpress_db.config import get_settings
    >>> settings = get_settings()
    >>> config = settings.connection_config()
"""

from fastpress_db.config.schema import (
    REQUIRED_KEYS,
    ConnectionConfig,
    validate_connection_config,
)
from fastpress_db.config.settings import Settings, get_settings

__all__ = [
    "REQUIRED_KEYS",
    "ConnectionConfig",
    "Settings",
    "get_settings",
    "validate_connection_config",
]
