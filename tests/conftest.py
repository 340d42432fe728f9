"""Pytest configuration for unit suites and the opt-in MySQL suite.

The MySQL suite runs against a real server only when RUN_MYSQL_TESTS=1 (or
--run-mysql-tests) and the FASTPRESS_TEST_DATABASE_* variables point at a
test database. Everything else runs against mocks or in-memory SQLite.
"""

from __future__ import annotations

import os
import re
import uuid
from pathlib import Path
from typing import Generator

import pytest
import sqlalchemy as sa
from dotenv import load_dotenv

from fastpress_db.config import get_settings
from fastpress_db.io.connectors.mysql_connector import MySQLConnectionProvider
from fastpress_db.io.database.executor import Database

_TEST_ENV_FILE = Path(__file__).parent.parent / ".fastpress_test_env"
if _TEST_ENV_FILE.exists():
    load_dotenv(_TEST_ENV_FILE, override=True)

MYSQL_OPTION = "run_mysql_tests"
MYSQL_MARK = "mysql_suite"
MYSQL_ENV = "RUN_MYSQL_TESTS"

SQLITE_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "database": "fastpress_test",
    "charset": "utf8mb4",
    "username": "tester",
    "password": "secret",
}


def _env_enabled(name: str) -> bool:
    return os.getenv(name) == "1"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the CLI flag mirroring RUN_MYSQL_TESTS."""
    parser.addoption(
        "--run-mysql-tests",
        action="store_true",
        dest=MYSQL_OPTION,
        default=_env_enabled(MYSQL_ENV),
        help="Run the MySQL-backed suite "
        "(set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests).",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip the MySQL suite unless its flag is enabled."""
    if config.getoption(MYSQL_OPTION):
        return

    skip_mysql = pytest.mark.skip(
        reason="Set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests to run the MySQL suite."
    )
    for item in items:
        if MYSQL_MARK in item.keywords:
            item.add_marker(skip_mysql)


def _validate_test_database(name: str) -> None:
    """Refuse to run destructive tests against a non-test database."""
    if not re.search(r"(test|tmp|dev|local|sandbox)", name or "", re.IGNORECASE):
        raise RuntimeError(
            f"Refusing to run tests against non-test database: {name}. "
            "Test databases must contain one of: test, tmp, dev, local, sandbox."
        )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_provider() -> Generator[MySQLConnectionProvider, None, None]:
    """Provider backed by a private in-memory SQLite engine."""
    engine = sa.create_engine("sqlite://")
    provider = MySQLConnectionProvider(SQLITE_CONFIG, engine=engine)
    try:
        yield provider
    finally:
        provider.close()
        engine.dispose()


@pytest.fixture
def sqlite_db(sqlite_provider: MySQLConnectionProvider) -> Database:
    """Database with a ``users`` table on in-memory SQLite."""
    setup = Database(SQLITE_CONFIG, provider=sqlite_provider)
    setup.query(
        "CREATE TABLE users ("
        "id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "name TEXT NOT NULL, "
        "email TEXT UNIQUE, "
        "`order` INTEGER DEFAULT 0)"
    )
    return Database(SQLITE_CONFIG, provider=sqlite_provider)


@pytest.fixture
def mysql_db() -> Generator[Database, None, None]:
    """Database against a real MySQL test server with a scratch table."""
    config = {
        "host": os.getenv("FASTPRESS_TEST_DATABASE_HOST", "127.0.0.1"),
        "port": int(os.getenv("FASTPRESS_TEST_DATABASE_PORT", "3306")),
        "database": os.getenv("FASTPRESS_TEST_DATABASE_NAME", "fastpress_test"),
        "charset": "utf8mb4",
        "username": os.getenv("FASTPRESS_TEST_DATABASE_USER", "root"),
        "password": os.getenv("FASTPRESS_TEST_DATABASE_PASSWORD", ""),
    }
    _validate_test_database(config["database"])

    table = f"users_{uuid.uuid4().hex[:8]}"
    provider = MySQLConnectionProvider(config)
    db = Database(config, provider=provider)
    db.query(
        f"CREATE TABLE `{table}` ("
        "id INT AUTO_INCREMENT PRIMARY KEY, "
        "name VARCHAR(100) NOT NULL, "
        "email VARCHAR(100) UNIQUE)"
    )
    db.table = table  # type: ignore[attr-defined]
    try:
        yield db
    finally:
        db.query(f"DROP TABLE IF EXISTS `{table}`")
        provider.close()
