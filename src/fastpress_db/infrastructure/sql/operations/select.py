"""
SQL SELECT statement builder.

Example:
    >>> from fastpress_db.infrastructure.sql import MySQLDialect, SelectBuilder
    >>> stmt = SelectBuilder(MySQLDialect()).select("users", ["id", "name"], {"id": 5})
    >>> stmt.sql
    'SELECT `id`, `name` FROM `users` WHERE `id` = :p0'
    >>> stmt.bind_params()
    {'p0': 5}
"""

from typing import Any, Mapping, Optional, Sequence

from ..core.identifier import WILDCARD
from ..core.parameters import ParameterMap, Statement
from .base import Dialect


class SelectBuilder:
    """High-level builder for SELECT statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def select(
        self,
        table: str,
        columns: Sequence[str] = (WILDCARD,),
        conditions: Optional[Mapping[str, Any]] = None,
        schema: Optional[str] = None,
    ) -> Statement:
        """
        Build a SELECT statement filtered by AND-ed equality conditions.

        Args:
            table: Table name
            columns: Column names; defaults to all columns
            conditions: Column to value filters; the WHERE clause is omitted
                when empty
            schema: Optional schema name

        Returns:
            Statement with SQL text and ordered parameters
        """
        if isinstance(columns, str):
            columns = [columns]
        params = ParameterMap()
        sql = self.dialect.build_select(
            table, list(columns), dict(conditions or {}), params, schema
        )
        return Statement(sql, params)
