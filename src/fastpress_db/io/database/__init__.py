"""Statement execution against a shared connection."""

from .executor import Database

__all__ = ["Database"]
