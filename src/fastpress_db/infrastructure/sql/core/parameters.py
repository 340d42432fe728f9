"""
SQL parameter binding utilities.

Placeholders are generated from a running counter (p0, p1, ...) instead of
column names, so the same column can appear in several clauses of one
statement and identifiers with spaces or reserved words never leak into
bind names.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

PLACEHOLDER_PREFIX = "p"


class ParameterMap:
    """
    Ordered association of generated placeholder names to bound values.

    Examples:
        >>> params = ParameterMap()
        >>> params.add("alice")
        ':p0'
        >>> params.add(5)
        ':p1'
        >>> params.items()
        [('p0', 'alice'), ('p1', 5)]
    """

    def __init__(self, prefix: str = PLACEHOLDER_PREFIX):
        self._prefix = prefix
        self._pairs: List[Tuple[str, Any]] = []

    def add(self, value: Any) -> str:
        """Bind a value under the next placeholder name and return its marker."""
        name = f"{self._prefix}{len(self._pairs)}"
        self._pairs.append((name, value))
        return f":{name}"

    def names(self) -> List[str]:
        return [name for name, _ in self._pairs]

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._pairs)

    def as_dict(self) -> Dict[str, Any]:
        """Return the mapping passed to the driver."""
        return dict(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterMap):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"ParameterMap({self._pairs!r})"


@dataclass(frozen=True)
class Statement:
    """A built SQL statement together with its ordered parameters."""

    sql: str
    params: ParameterMap = field(default_factory=ParameterMap)

    def bind_params(self) -> Dict[str, Any]:
        return self.params.as_dict()
