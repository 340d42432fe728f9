"""
Unit tests for the Database executor, using a mocked connection provider.
"""

from unittest.mock import MagicMock, patch

import pytest

from fastpress_db.exceptions import (
    ConfigurationError,
    QueryError,
    StatementBuildError,
)
from fastpress_db.io.connectors.mysql_connector import MySQLConnectionProvider
from fastpress_db.io.database.executor import Database

CONFIG = {
    "host": "db.internal",
    "port": 3306,
    "database": "app",
    "charset": "utf8mb4",
    "username": "app_user",
    "password": "s3cr3t",
}


@pytest.fixture
def provider():
    return MagicMock()


@pytest.fixture
def db(provider):
    return Database(CONFIG, provider=provider)


def _result(rows=None, lastrowid=None, rowcount=0):
    result = MagicMock()
    rows = rows or []
    result.mappings.return_value.first.return_value = rows[0] if rows else None
    result.mappings.return_value.all.return_value = rows
    result.lastrowid = lastrowid
    result.rowcount = rowcount
    return result


@pytest.mark.unit
class TestConstruction:
    def test_missing_config_key_fails_before_any_connection(self):
        with pytest.raises(ConfigurationError, match="password"):
            Database({k: v for k, v in CONFIG.items() if k != "password"})

    def test_default_provider_is_created_from_config(self):
        db = Database(CONFIG)

        assert isinstance(db.provider, MySQLConnectionProvider)
        assert db.provider.config == db.config
        assert db.provider.is_open is False

    def test_instances_share_injected_provider(self, provider):
        first = Database(CONFIG, provider=provider)
        second = Database(CONFIG, provider=provider)

        assert first.provider is second.provider

    def test_without_config_or_provider(self):
        with pytest.raises(ConfigurationError):
            Database()

    def test_from_settings(self, monkeypatch, provider):
        env = {
            "FASTPRESS_DATABASE_HOST": "db.internal",
            "FASTPRESS_DATABASE_PORT": "3306",
            "FASTPRESS_DATABASE_NAME": "app",
            "FASTPRESS_DATABASE_CHARSET": "utf8mb4",
            "FASTPRESS_DATABASE_USER": "app_user",
            "FASTPRESS_DATABASE_PASSWORD": "pw",
        }
        for key, value in env.items():
            monkeypatch.setenv(key, value)

        db = Database.from_settings(provider=provider)

        assert db.config.database == "app"
        assert db.provider is provider


@pytest.mark.unit
class TestSelect:
    def test_select_returns_first_row(self, db, provider):
        provider.execute.return_value = _result(rows=[{"id": 5, "name": "John Doe"}])

        row = db.select("users", ["id", "name"], {"id": 5})

        assert row == {"id": 5, "name": "John Doe"}
        provider.execute.assert_called_once_with(
            "SELECT `id`, `name` FROM `users` WHERE `id` = :p0", {"p0": 5}
        )

    def test_select_no_match_returns_none(self, db, provider):
        provider.execute.return_value = _result()

        assert db.select("users", ["*"], {"id": 404}) is None

    def test_select_without_conditions_omits_where(self, db, provider):
        provider.execute.return_value = _result()

        db.select("users", ["*"], {})

        sql, params = provider.execute.call_args.args
        assert sql == "SELECT * FROM `users`"
        assert params == {}

    def test_select_all_returns_rows_in_driver_order(self, db, provider):
        rows = [{"id": 3}, {"id": 1}, {"id": 2}]
        provider.execute.return_value = _result(rows=rows)

        assert db.select_all("users", ["id"]) == rows

    def test_select_all_empty(self, db, provider):
        provider.execute.return_value = _result()

        assert db.select_all("users") == []

    def test_select_and_select_all_build_same_sql(self, db, provider):
        provider.execute.return_value = _result()

        db.select("users", ["id"], {"name": "a", "email": "b"})
        db.select_all("users", ["id"], {"name": "a", "email": "b"})

        first, second = provider.execute.call_args_list
        assert first.args == second.args


@pytest.mark.unit
class TestInsert:
    def test_insert_returns_last_insert_id(self, db, provider):
        provider.execute.return_value = _result(lastrowid=42)

        new_id = db.insert("users", {"name": "John Doe", "email": "john@example.com"})

        assert new_id == 42
        provider.execute.assert_called_once_with(
            "INSERT INTO `users` (`name`, `email`) VALUES (:p0, :p1)",
            {"p0": "John Doe", "p1": "john@example.com"},
        )

    def test_insert_zero_id_is_returned_as_reported(self, db, provider):
        provider.execute.return_value = _result(lastrowid=0)

        assert db.insert("tags", {"name": "x"}) == 0

    def test_insert_without_reported_id_raises(self, db, provider):
        provider.execute.return_value = _result(lastrowid=None)

        with pytest.raises(QueryError, match="No generated identifier"):
            db.insert("tags", {"name": "x"})

    def test_insert_empty_data_rejected_before_execution(self, db, provider):
        with pytest.raises(StatementBuildError):
            db.insert("users", {})

        provider.execute.assert_not_called()
        assert db.get_executed_statements() == ()


@pytest.mark.unit
class TestUpdateDelete:
    def test_update_returns_rowcount_unmodified(self, db, provider):
        provider.execute.return_value = _result(rowcount=0)

        assert db.update("users", {"email": "new@example.com"}, {"id": 5}) == 0
        provider.execute.assert_called_once_with(
            "UPDATE `users` SET `email` = :p0 WHERE `id` = :p1",
            {"p0": "new@example.com", "p1": 5},
        )

    def test_update_same_column_binds_both_values(self, db, provider):
        provider.execute.return_value = _result(rowcount=1)

        db.update("counters", {"hits": 11}, {"hits": 10})

        _, params = provider.execute.call_args.args
        assert params == {"p0": 11, "p1": 10}

    def test_update_empty_conditions_rejected(self, db, provider):
        with pytest.raises(StatementBuildError):
            db.update("users", {"name": "x"}, {})
        provider.execute.assert_not_called()

    def test_delete_missing_row_returns_zero(self, db, provider):
        provider.execute.return_value = _result(rowcount=0)

        assert db.delete("users", {"id": 5}) == 0
        provider.execute.assert_called_once_with(
            "DELETE FROM `users` WHERE `id` = :p0", {"p0": 5}
        )

    def test_delete_empty_conditions_rejected(self, db, provider):
        with pytest.raises(StatementBuildError):
            db.delete("users", {})
        provider.execute.assert_not_called()


@pytest.mark.unit
class TestQueryAndLog:
    def test_query_passes_sql_verbatim(self, db, provider):
        handle = _result()
        provider.execute.return_value = handle
        sql = "SELECT COUNT(*) AS n FROM users u JOIN orders o ON o.user_id = u.id WHERE u.id = :uid"

        assert db.query(sql, {"uid": 7}) is handle
        provider.execute.assert_called_once_with(sql, {"uid": 7})

    def test_query_without_params(self, db, provider):
        db.query("SELECT 1")
        provider.execute.assert_called_once_with("SELECT 1", {})

    def test_log_records_every_statement_in_order(self, db, provider):
        provider.execute.return_value = _result(lastrowid=1, rowcount=1)

        db.insert("users", {"name": "a"})
        db.select("users", ["*"], {"id": 1})
        db.update("users", {"name": "b"}, {"id": 1})
        db.query("SELECT 1")
        db.delete("users", {"id": 1})

        assert db.get_executed_statements() == (
            "INSERT INTO `users` (`name`) VALUES (:p0)",
            "SELECT * FROM `users` WHERE `id` = :p0",
            "UPDATE `users` SET `name` = :p0 WHERE `id` = :p1",
            "SELECT 1",
            "DELETE FROM `users` WHERE `id` = :p0",
        )
        assert db.get_queries() == db.get_executed_statements()

    def test_log_is_a_snapshot(self, db, provider):
        db.query("SELECT 1")
        snapshot = db.get_executed_statements()
        db.query("SELECT 2")

        assert snapshot == ("SELECT 1",)

    def test_logs_are_per_instance(self, provider):
        first = Database(CONFIG, provider=provider)
        second = Database(CONFIG, provider=provider)

        first.query("SELECT 1")

        assert second.get_executed_statements() == ()

    def test_failed_statement_is_logged_and_propagated(self, db, provider):
        provider.execute.side_effect = QueryError("Duplicate entry", sql="INSERT ...")

        with pytest.raises(QueryError, match="Duplicate entry"):
            db.insert("users", {"email": "dup@example.com"})

        assert db.get_executed_statements() == (
            "INSERT INTO `users` (`email`) VALUES (:p0)",
        )

    def test_execute_statement_runs_builder_output(self, db, provider):
        from fastpress_db.infrastructure.sql import MySQLDialect, SelectBuilder

        stmt = SelectBuilder(MySQLDialect()).select("users", ["id"], {"id": 1})
        db.execute_statement(stmt)

        provider.execute.assert_called_once_with(stmt.sql, {"p0": 1})
