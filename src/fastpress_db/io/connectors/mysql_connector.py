"""
MySQL connection provider.

Owns the single shared SQLAlchemy connection used by one or more
``Database`` executors. The handle is opened explicitly with ``open()`` or
lazily on first use; initialization is guarded by a lock so concurrent
first use never creates two handles. Statements execute on an AUTOCOMMIT
connection and are serialized through a re-entrant lock.
"""

import threading
from typing import Any, Mapping, Optional, Protocol, Union

import sqlalchemy as sa
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Connection, CursorResult, Engine

from fastpress_db.config.schema import ConnectionConfig, validate_connection_config
from fastpress_db.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    QueryError,
)
from fastpress_db.utils.logging import get_logger

logger = get_logger(__name__)


class ConnectionProvider(Protocol):
    """Narrow interface the executor relies on."""

    def execute(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> CursorResult: ...


class MySQLConnectionProvider:
    """
    Lazily opened, process-shareable MySQL connection.

    Share one provider between several executors to share the handle:

        >>> provider = MySQLConnectionProvider(config)
        >>> users = Database(config, provider=provider)
        >>> audit = Database(config, provider=provider)

    Args:
        config: Connection attributes (mapping or ConnectionConfig)
        engine: Pre-built SQLAlchemy engine; when given, config is optional
        connect_timeout: Seconds to wait for the TCP handshake
    """

    def __init__(
        self,
        config: Union[ConnectionConfig, Mapping[str, Any], None] = None,
        *,
        engine: Optional[Engine] = None,
        connect_timeout: int = 10,
    ):
        if config is None and engine is None:
            raise ConfigurationError("Either a connection config or an engine is required")

        self.config = validate_connection_config(config) if config is not None else None
        self.connect_timeout = connect_timeout
        self._engine = engine
        self._owns_engine = engine is None
        self._connection: Optional[Connection] = None
        self._init_lock = threading.Lock()
        self._execute_lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._usable(self._connection)

    @staticmethod
    def _usable(connection: Optional[Connection]) -> bool:
        return connection is not None and not connection.closed

    def _create_engine(self) -> Engine:
        return sa.create_engine(
            self.config.to_url(),
            connect_args={"connect_timeout": self.connect_timeout},
        )

    def open(self) -> Connection:
        """
        Open the shared connection if it is not open yet.

        Returns:
            The shared SQLAlchemy connection

        Raises:
            DatabaseConnectionError: If the database cannot be reached or
                rejects the credentials
        """
        # Read the handle once; close() may clear it concurrently
        connection = self._connection
        if self._usable(connection):
            return connection

        with self._init_lock:
            connection = self._connection
            if self._usable(connection):
                return connection

            if self._engine is None:
                self._engine = self._create_engine()

            target = (
                self.config.safe_dsn()
                if self.config is not None
                else self._engine.url.render_as_string(hide_password=True)
            )
            try:
                connection = self._engine.connect().execution_options(
                    isolation_level="AUTOCOMMIT"
                )
            except sa_exc.SQLAlchemyError as e:
                logger.error(
                    "database.connection.failed",
                    dsn=target,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise DatabaseConnectionError(f"Database connection failed: {e}") from e

            self._connection = connection
            logger.info("database.connection.opened", dsn=target)
            return connection

    def connection(self) -> Connection:
        """Return the shared connection, opening it on first use."""
        return self.open()

    def execute(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> CursorResult:
        """
        Prepare and execute a statement with named bound parameters.

        Args:
            sql: SQL text using ``:name`` placeholders
            params: Values for the placeholders

        Returns:
            SQLAlchemy CursorResult

        Raises:
            QueryError: If the engine rejects the statement
            DatabaseConnectionError: If the connection is lost
        """
        bound = dict(params or {})
        with self._execute_lock:
            connection = self.open()
            try:
                return connection.execute(sa.text(sql), bound)
            except sa_exc.DBAPIError as e:
                if e.connection_invalidated:
                    self._discard()
                    raise DatabaseConnectionError(f"Database connection lost: {e.orig}") from e
                connection.rollback()
                raise QueryError(str(e.orig), sql=sql, params=bound) from e
            except sa_exc.StatementError as e:
                connection.rollback()
                raise QueryError(str(e.orig or e), sql=sql, params=bound) from e

    def _discard(self) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            try:
                connection.close()
            except sa_exc.SQLAlchemyError as e:
                logger.warning("database.connection.close_failed", error=str(e))
        logger.warning("database.connection.discarded")

    def close(self) -> None:
        """Close the shared connection and dispose of the engine."""
        with self._execute_lock, self._init_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.info("database.connection.closed")
            if self._engine is not None and self._owns_engine:
                self._engine.dispose()
                self._engine = None

    def __enter__(self) -> "MySQLConnectionProvider":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
