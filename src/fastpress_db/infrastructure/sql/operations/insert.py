"""
SQL INSERT statement builder.

Example:
    >>> from fastpress_db.infrastructure.sql import InsertBuilder, MySQLDialect
    >>> stmt = InsertBuilder(MySQLDialect()).insert(
    ...     "users", {"name": "John Doe", "email": "john@example.com"}
    ... )
    >>> print(stmt.sql)
    INSERT INTO `users` (`name`, `email`) VALUES (:p0, :p1)
"""

from typing import Any, Mapping, Optional

from ..core.parameters import ParameterMap, Statement
from .base import Dialect


class InsertBuilder:
    """High-level builder for INSERT statements."""

    def __init__(self, dialect: Dialect):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect to use for statement generation
        """
        self.dialect = dialect

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        schema: Optional[str] = None,
    ) -> Statement:
        """
        Build a simple INSERT statement.

        Args:
            table: Table name
            data: Column to value mapping, rendered in iteration order
            schema: Schema name (optional)

        Returns:
            Statement with SQL text and ordered parameters

        Raises:
            StatementBuildError: If data is empty
        """
        params = ParameterMap()
        sql = self.dialect.build_insert(table, data, params, schema)
        return Statement(sql, params)
