"""
Query builder and executor.

``Database`` turns table/column/condition descriptions into parameterized
MySQL statements, runs them through a connection provider and maps the
driver result into plain Python values. Every statement is appended to a
per-instance log before it is executed.

Example:
    >>> db = Database({
    ...     "host": "localhost", "port": 3306, "database": "app",
    ...     "charset": "utf8mb4", "username": "app", "password": "secret",
    ... })
    >>> user_id = db.insert("users", {"name": "John Doe", "email": "john@example.com"})
    >>> db.select("users", ["name"], {"id": user_id})
    {'name': 'John Doe'}
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy.engine import CursorResult

from fastpress_db.config import get_settings
from fastpress_db.config.schema import ConnectionConfig, validate_connection_config
from fastpress_db.exceptions import DatabaseError, QueryError
from fastpress_db.infrastructure.sql import (
    DeleteBuilder,
    InsertBuilder,
    MySQLDialect,
    SelectBuilder,
    Statement,
    UpdateBuilder,
)
from fastpress_db.infrastructure.sql.core.identifier import WILDCARD
from fastpress_db.io.connectors.mysql_connector import (
    ConnectionProvider,
    MySQLConnectionProvider,
)
from fastpress_db.utils.logging import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]


class Database:
    """
    Minimal query builder and executor over a shared MySQL connection.

    Args:
        config: Connection attributes; validated eagerly
        provider: Connection provider to execute through. When omitted a
            MySQLConnectionProvider is created for this instance; pass the
            same provider to several executors to share one connection.
    """

    def __init__(
        self,
        config: Union[ConnectionConfig, Mapping[str, Any], None] = None,
        provider: Optional[ConnectionProvider] = None,
    ):
        self.config = validate_connection_config(config) if config is not None else None
        if provider is None:
            provider = MySQLConnectionProvider(self.config)
        self.provider = provider

        dialect = MySQLDialect()
        self._select_builder = SelectBuilder(dialect)
        self._insert_builder = InsertBuilder(dialect)
        self._update_builder = UpdateBuilder(dialect)
        self._delete_builder = DeleteBuilder(dialect)
        self._statements: List[str] = []

    @classmethod
    def from_settings(cls, provider: Optional[ConnectionProvider] = None) -> "Database":
        """Build an executor from FASTPRESS_* environment settings."""
        return cls(get_settings().connection_config(), provider=provider)

    def select(
        self,
        table: str,
        columns: Sequence[str] = (WILDCARD,),
        conditions: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Row]:
        """
        Fetch the first row matching all conditions.

        Returns:
            Column to value mapping, or None when no row matches
        """
        statement = self._select_builder.select(table, columns, conditions)
        result = self._execute(statement.sql, statement.bind_params(), "select")
        row = result.mappings().first()
        return dict(row) if row is not None else None

    def select_all(
        self,
        table: str,
        columns: Sequence[str] = (WILDCARD,),
        conditions: Optional[Mapping[str, Any]] = None,
    ) -> List[Row]:
        """Fetch every matching row in the order the database returns them."""
        statement = self._select_builder.select(table, columns, conditions)
        result = self._execute(statement.sql, statement.bind_params(), "select_all")
        return [dict(row) for row in result.mappings().all()]

    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        """
        Insert one row and return its generated identifier.

        Raises:
            StatementBuildError: If data is empty
            QueryError: If the driver reports no generated identifier
        """
        statement = self._insert_builder.insert(table, data)
        result = self._execute(statement.sql, statement.bind_params(), "insert")
        last_id = result.lastrowid
        if last_id is None:
            raise QueryError(
                f"No generated identifier reported for insert into {table!r}",
                sql=statement.sql,
            )
        return int(last_id)

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        conditions: Mapping[str, Any],
    ) -> int:
        """
        Update matching rows.

        Returns:
            Affected row count exactly as reported by the driver
        """
        statement = self._update_builder.update(table, data, conditions)
        result = self._execute(statement.sql, statement.bind_params(), "update")
        return result.rowcount

    def delete(self, table: str, conditions: Mapping[str, Any]) -> int:
        """Delete matching rows and return the affected row count."""
        statement = self._delete_builder.delete(table, conditions)
        result = self._execute(statement.sql, statement.bind_params(), "delete")
        return result.rowcount

    def query(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> CursorResult:
        """
        Execute caller-supplied SQL verbatim.

        No validation or escaping is applied; use ``:name`` placeholders and
        pass values through params.
        """
        return self._execute(sql, params or {}, "query")

    def execute_statement(self, statement: Statement) -> CursorResult:
        """Execute a statement produced by one of the builders."""
        return self._execute(statement.sql, statement.bind_params(), "statement")

    def get_executed_statements(self) -> Tuple[str, ...]:
        """Return every statement executed by this instance, in order."""
        return tuple(self._statements)

    get_queries = get_executed_statements

    def _execute(
        self, sql: str, params: Mapping[str, Any], operation: str
    ) -> CursorResult:
        self._statements.append(sql)
        try:
            result = self.provider.execute(sql, params)
        except DatabaseError as e:
            logger.error(
                "database.query.failed",
                operation=operation,
                sql=sql,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        logger.debug(
            "database.statement.executed",
            operation=operation,
            sql=sql,
            param_count=len(params),
        )
        return result
