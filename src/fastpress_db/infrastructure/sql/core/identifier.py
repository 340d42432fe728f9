"""
SQL identifier handling utilities.

Provides functions for proper quoting and qualification of MySQL identifiers
(table names, column names) to avoid reserved-word collisions and prevent
SQL injection through identifiers.

Built statements are executed as named-bind SQL, where ``:name`` marks a
parameter. Colons inside a quoted identifier are therefore written as
``\\:``, which the bind parser turns back into a literal colon.
"""

from typing import Optional

from fastpress_db.exceptions import StatementBuildError

WILDCARD = "*"

QUOTE_CHAR = "`"
ESCAPED_COLON = "\\:"


def quote_identifier(name: str) -> str:
    """
    Quote a MySQL identifier (table or column name).

    The wildcard ``*`` is returned unchanged.

    Args:
        name: The identifier to quote

    Returns:
        Properly quoted identifier

    Raises:
        StatementBuildError: If name is empty or not a string

    Examples:
        >>> quote_identifier("users")
        '`users`'
        >>> quote_identifier("odd`name")
        '`odd``name`'
        >>> quote_identifier("due :at")
        '`due \\\\:at`'
        >>> quote_identifier("*")
        '*'
    """
    if not isinstance(name, str) or not name:
        raise StatementBuildError("Identifier name must be non-empty string")

    if name == WILDCARD:
        return name

    # Double embedded backticks; escape colons for the bind parser
    escaped = name.replace(QUOTE_CHAR, QUOTE_CHAR * 2).replace(":", ESCAPED_COLON)
    return f"{QUOTE_CHAR}{escaped}{QUOTE_CHAR}"


def unquote_identifier(quoted: str) -> str:
    """
    Reverse quote_identifier, returning the raw identifier.

    Examples:
        >>> unquote_identifier("`odd``name`")
        'odd`name'
    """
    if quoted == WILDCARD:
        return quoted
    if len(quoted) < 2 or quoted[0] != QUOTE_CHAR or quoted[-1] != QUOTE_CHAR:
        raise StatementBuildError(f"Not a quoted identifier: {quoted!r}")
    return quoted[1:-1].replace(ESCAPED_COLON, ":").replace(QUOTE_CHAR * 2, QUOTE_CHAR)


def qualify_table(table: str, schema: Optional[str] = None) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Examples:
        >>> qualify_table("users")
        '`users`'
        >>> qualify_table("users", schema="app")
        '`app`.`users`'
    """
    quoted_table = quote_identifier(table)
    if schema:
        return f"{quote_identifier(schema)}.{quoted_table}"
    return quoted_table
