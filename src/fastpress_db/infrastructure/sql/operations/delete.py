"""SQL DELETE statement builder."""

from typing import Any, Mapping, Optional

from ..core.parameters import ParameterMap, Statement
from .base import Dialect


class DeleteBuilder:
    """High-level builder for DELETE statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def delete(
        self,
        table: str,
        conditions: Mapping[str, Any],
        schema: Optional[str] = None,
    ) -> Statement:
        """
        Build a DELETE statement.

        Raises:
            StatementBuildError: If conditions is empty
        """
        params = ParameterMap()
        sql = self.dialect.build_delete(table, conditions, params, schema)
        return Statement(sql, params)
