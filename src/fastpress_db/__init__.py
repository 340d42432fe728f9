"""
fastpress_db - Minimal SQL query builder and executor.

Builds injection-safe, parameterized MySQL statements from table, column
and condition descriptions and executes them over a shared connection.
"""

from fastpress_db.config.schema import ConnectionConfig
from fastpress_db.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
    QueryError,
    StatementBuildError,
)
from fastpress_db.io.connectors.mysql_connector import MySQLConnectionProvider
from fastpress_db.io.database.executor import Database

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConnectionConfig",
    "Database",
    "DatabaseConnectionError",
    "DatabaseError",
    "MySQLConnectionProvider",
    "QueryError",
    "StatementBuildError",
]
