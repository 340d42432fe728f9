"""
SQL module for centralized SQL generation.

This module provides reusable utilities for building SQL statements with
proper identifier quoting, collision-free parameter naming, and MySQL
syntax.
"""

from .core.identifier import qualify_table, quote_identifier, unquote_identifier
from .core.parameters import ParameterMap, Statement
from .dialects.mysql import MySQLDialect
from .operations.delete import DeleteBuilder
from .operations.insert import InsertBuilder
from .operations.select import SelectBuilder
from .operations.update import UpdateBuilder

__all__ = [
    "quote_identifier",
    "unquote_identifier",
    "qualify_table",
    "ParameterMap",
    "Statement",
    "MySQLDialect",
    "SelectBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
]
