"""
MySQL-specific SQL dialect implementation.

Provides MySQL syntax (backtick quoting) for SELECT, INSERT, UPDATE and
DELETE statements built from column/value mappings. Values never appear in
the SQL text; each one is bound through the supplied ParameterMap.
"""

from typing import Any, Mapping, Optional, Sequence

from fastpress_db.exceptions import StatementBuildError

from ..core.identifier import qualify_table, quote_identifier
from ..core.parameters import ParameterMap


class MySQLDialect:
    """MySQL SQL dialect implementation."""

    name = "mysql"

    def quote(self, identifier: str) -> str:
        """Quote an identifier using MySQL syntax (backticks)."""
        return quote_identifier(identifier)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a fully qualified table reference."""
        return qualify_table(table, schema)

    def build_assignments(
        self, data: Mapping[str, Any], params: ParameterMap, separator: str
    ) -> str:
        """Render ``col = :pN`` pairs joined by separator, binding each value."""
        return separator.join(
            f"{self.quote(column)} = {params.add(value)}"
            for column, value in data.items()
        )

    def build_where(self, conditions: Mapping[str, Any], params: ParameterMap) -> str:
        """
        Build a WHERE clause of AND-ed equality conditions.

        Returns an empty string when there are no conditions.
        """
        if not conditions:
            return ""
        return " WHERE " + self.build_assignments(conditions, params, " AND ")

    def build_select(
        self,
        table: str,
        columns: Sequence[str],
        conditions: Mapping[str, Any],
        params: ParameterMap,
        schema: Optional[str] = None,
    ) -> str:
        """
        Build a SELECT statement.

        Args:
            table: Table name
            columns: Column names, or ["*"]
            conditions: Equality filters combined with AND
            params: Parameter map receiving condition values
            schema: Optional schema name

        Returns:
            SELECT SQL statement
        """
        if isinstance(columns, str):
            columns = [columns]
        if not columns:
            raise StatementBuildError("SELECT requires at least one column")
        quoted_cols = ", ".join(self.quote(c) for c in columns)
        sql = f"SELECT {quoted_cols} FROM {self.qualify(table, schema)}"
        return sql + self.build_where(conditions, params)

    def build_insert(
        self,
        table: str,
        data: Mapping[str, Any],
        params: ParameterMap,
        schema: Optional[str] = None,
    ) -> str:
        """Build a simple INSERT statement, one placeholder per column."""
        if not data:
            raise StatementBuildError(f"INSERT into {table!r} requires data")
        quoted_cols = ", ".join(self.quote(c) for c in data)
        values = ", ".join(params.add(v) for v in data.values())
        return f"INSERT INTO {self.qualify(table, schema)} ({quoted_cols}) VALUES ({values})"

    def build_update(
        self,
        table: str,
        data: Mapping[str, Any],
        conditions: Mapping[str, Any],
        params: ParameterMap,
        schema: Optional[str] = None,
    ) -> str:
        """
        Build an UPDATE statement.

        SET placeholders are generated before WHERE placeholders in the
        same parameter map.
        """
        if not data:
            raise StatementBuildError(f"UPDATE of {table!r} requires data")
        if not conditions:
            raise StatementBuildError(
                f"UPDATE of {table!r} requires conditions; use query() to update every row"
            )
        assignments = self.build_assignments(data, params, ", ")
        where = self.build_where(conditions, params)
        return f"UPDATE {self.qualify(table, schema)} SET {assignments}{where}"

    def build_delete(
        self,
        table: str,
        conditions: Mapping[str, Any],
        params: ParameterMap,
        schema: Optional[str] = None,
    ) -> str:
        """Build a DELETE statement with a mandatory WHERE clause."""
        if not conditions:
            raise StatementBuildError(
                f"DELETE from {table!r} requires conditions; use query() to delete every row"
            )
        return f"DELETE FROM {self.qualify(table, schema)}{self.build_where(conditions, params)}"
