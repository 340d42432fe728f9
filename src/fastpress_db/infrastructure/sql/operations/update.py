"""SQL UPDATE statement builder."""

from typing import Any, Mapping, Optional

from ..core.parameters import ParameterMap, Statement
from .base import Dialect


class UpdateBuilder:
    """
    High-level builder for UPDATE statements.

    SET and WHERE values share one parameter map, so a column used on both
    sides of the statement gets two distinct placeholders.

    Example:
        >>> from fastpress_db.infrastructure.sql import MySQLDialect, UpdateBuilder
        >>> stmt = UpdateBuilder(MySQLDialect()).update(
        ...     "counters", {"hits": 11}, {"hits": 10}
        ... )
        >>> stmt.sql
        'UPDATE `counters` SET `hits` = :p0 WHERE `hits` = :p1'
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        conditions: Mapping[str, Any],
        schema: Optional[str] = None,
    ) -> Statement:
        """
        Build an UPDATE statement.

        Raises:
            StatementBuildError: If data or conditions is empty
        """
        params = ParameterMap()
        sql = self.dialect.build_update(table, data, conditions, params, schema)
        return Statement(sql, params)
