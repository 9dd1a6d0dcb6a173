from __future__ import annotations

from pathlib import Path

import pytest

from src.core.config import AppConfig
from src.core.errors import ConnectionError, ErrorKind, NoSuchTableError, QueryError
from src.storage.sqlite_adapter import Database, SQLiteAdapter, decode_column, quote_identifier


def test_connect_creates_database_file(adapter: SQLiteAdapter, config: AppConfig) -> None:
    expected = Path(config.data_dir) / "com.renamed.app" / "db" / "settings.db"

    with adapter.connect() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert str(conn.execute("PRAGMA journal_mode").fetchone()[0]).lower() == "wal"

    assert adapter.path == expected
    assert expected.exists()


def test_connect_commits_on_success_and_rolls_back_on_error(adapter: SQLiteAdapter) -> None:
    with adapter.connect() as conn:
        conn.execute("CREATE TABLE t(x INTEGER)")
        conn.execute("INSERT INTO t(x) VALUES (1)")

    with pytest.raises(RuntimeError):
        with adapter.connect() as conn:
            conn.execute("INSERT INTO t(x) VALUES (2)")
            raise RuntimeError("boom")

    with adapter.connect() as conn:
        assert conn.execute("SELECT x FROM t").fetchall() == [(1,)]


def test_connect_wraps_open_failure(adapter: SQLiteAdapter) -> None:
    # A directory squatting on the database file name cannot be opened
    adapter.path.mkdir()

    with pytest.raises(ConnectionError) as excinfo:
        with adapter.connect():
            pass

    assert excinfo.value.kind is ErrorKind.CONNECTION_OPEN_FAILED
    assert excinfo.value.message == "Unable to open the 'Settings' database"
    assert excinfo.value.cause


def test_connect_rejects_non_database_file(adapter: SQLiteAdapter) -> None:
    adapter.path.write_text("definitely not sqlite " * 20, encoding="utf-8")

    with pytest.raises(ConnectionError):
        with adapter.connect():
            pass


def test_table_exists_and_drop_table(adapter: SQLiteAdapter) -> None:
    assert adapter.table_exists() is False

    with adapter.connect() as conn:
        conn.execute("CREATE TABLE settings(id TEXT PRIMARY KEY, theme INTEGER)")

    assert adapter.table_exists() is True
    assert adapter.table_exists("other") is False

    adapter.drop_table()
    assert adapter.table_exists() is False
    # Idempotent
    adapter.drop_table()


def test_drop_table_quotes_the_name(adapter: SQLiteAdapter) -> None:
    with adapter.connect() as conn:
        conn.execute('CREATE TABLE "a""b"(x INTEGER)')
        conn.execute("CREATE TABLE a(x INTEGER)")

    assert adapter.table_exists('a"b') is True

    adapter.drop_table('a"b')

    assert adapter.table_exists('a"b') is False
    assert adapter.table_exists("a") is True


@pytest.mark.parametrize(
    ("name", "quoted"),
    [("settings", '"settings"'), ('a"b', '"a""b"'), ("drop table x; --", '"drop table x; --"')],
)
def test_quote_identifier(name: str, quoted: str) -> None:
    assert quote_identifier(name) == quoted


def test_get_columns_lists_name_and_type_in_order(adapter: SQLiteAdapter) -> None:
    with adapter.connect() as conn:
        conn.execute("CREATE TABLE settings(id TEXT PRIMARY KEY, theme INTEGER, note)")

    assert adapter.get_columns() == [("id", "TEXT"), ("theme", "INTEGER"), ("note", "")]


def test_get_columns_requires_table(adapter: SQLiteAdapter) -> None:
    with pytest.raises(NoSuchTableError) as excinfo:
        adapter.get_columns()

    assert excinfo.value.kind is ErrorKind.TABLE_MISSING
    assert excinfo.value.message == "Could not read the 'Settings' database"


def test_decode_column_fails_the_listing_for_non_text_values() -> None:
    assert decode_column("settings", 0, ("id", "TEXT")) == ("id", "TEXT")

    with pytest.raises(QueryError) as excinfo:
        decode_column("settings", 3, (b"\xff", "TEXT"))

    assert excinfo.value.kind is ErrorKind.SCHEMA_QUERY_FAILED
    assert "column 3" in excinfo.value.cause


def test_database_enum_names() -> None:
    assert Database.SETTINGS.table == "settings"
    assert Database.SETTINGS.display_name == "Settings"
    assert Database.SETTINGS.file_name == "settings"
