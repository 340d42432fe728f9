"""
Exception hierarchy for fastpress_db.

Every failure raised by the query layer derives from ``DatabaseError`` so
callers can catch the whole family with a single ``except`` clause.
"""

from typing import Any, Mapping, Optional


class DatabaseError(Exception):
    """Base class for all query layer errors."""


class ConfigurationError(DatabaseError):
    """Raised when a required connection attribute is missing or malformed."""


class DatabaseConnectionError(DatabaseError):
    """Raised when the shared connection handle cannot be established."""


class StatementBuildError(DatabaseError, ValueError):
    """Raised when a statement cannot be built from the supplied arguments."""


class QueryError(DatabaseError):
    """
    Raised when the database engine rejects a statement.

    Attributes:
        sql: The SQL text that was sent to the engine
        params: The bound parameters, if any
    """

    def __init__(
        self,
        message: str,
        sql: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.sql = sql
        self.params = dict(params) if params else {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.sql:
            return f"{base} [SQL: {self.sql}]"
        return base
