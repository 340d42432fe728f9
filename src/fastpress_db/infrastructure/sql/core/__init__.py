"""Core SQL utilities package."""

from .identifier import WILDCARD, qualify_table, quote_identifier, unquote_identifier
from .parameters import ParameterMap, Statement

__all__ = [
    "WILDCARD",
    "quote_identifier",
    "unquote_identifier",
    "qualify_table",
    "ParameterMap",
    "Statement",
]
