"""Protocol shared by the statement builders."""

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.parameters import ParameterMap


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def qualify(self, table: str, schema: Optional[str] = None) -> str: ...
    def build_select(
        self, table: str, columns: Sequence[str], conditions: Mapping[str, Any], params: ParameterMap, schema: Optional[str] = None
    ) -> str: ...
    def build_insert(
        self, table: str, data: Mapping[str, Any], params: ParameterMap, schema: Optional[str] = None
    ) -> str: ...
    def build_update(
        self, table: str, data: Mapping[str, Any], conditions: Mapping[str, Any], params: ParameterMap, schema: Optional[str] = None
    ) -> str: ...
    def build_delete(
        self, table: str, conditions: Mapping[str, Any], params: ParameterMap, schema: Optional[str] = None
    ) -> str: ...
