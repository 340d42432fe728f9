"""Database connection providers."""

from .mysql_connector import ConnectionProvider, MySQLConnectionProvider

__all__ = ["ConnectionProvider", "MySQLConnectionProvider"]
