from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from src.core.config import AppConfig
from src.core.errors import ConnectionError, NoSuchTableError, QueryError, WriteError
from src.lib.paths import database_path

_SOURCE = "src.storage.sqlite_adapter"

logger = logging.getLogger(__name__)


class Database(Enum):
    """Logical databases; each maps to one file holding one table of the same name."""

    SETTINGS = ("settings", "Settings")

    def __init__(self, table: str, display_name: str) -> None:
        self.table = table
        self.display_name = display_name

    @property
    def file_name(self) -> str:
        return self.table


class SQLiteAdapter:
    """Per-operation SQLite access for one logical database.

    - Every ``connect()`` opens a fresh connection and closes it on exit
    - Commits on success, rolls back when the block raises
    - Enables PRAGMAs: foreign_keys=ON, journal_mode=WAL, synchronous=NORMAL
    """

    backend: str = "sqlite"

    def __init__(self, database: Database, config: AppConfig) -> None:
        self._database = database
        self._config = config

    @property
    def database(self) -> Database:
        return self._database

    @property
    def path(self) -> Path:
        return database_path(self._config, self._database.file_name)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        path = self.path
        _t0 = time.perf_counter()
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = sqlite3.connect(str(path), timeout=5.0)
            self._apply_pragmas(conn)
        except sqlite3.Error as exc:
            if conn is not None:
                conn.close()
            logger.error(
                "Database open failed",
                extra={"database": self._database.table, "path": str(path), "cause": str(exc)},
            )
            raise ConnectionError(
                f"Unable to open the '{self._database.display_name}' database",
                cause=str(exc),
                source=f"{_SOURCE}.connect",
            ) from exc
        try:
            yield conn
        except BaseException:
            conn.rollback()
            raise
        else:
            try:
                conn.commit()
            except sqlite3.Error as exc:
                raise WriteError(
                    f"Could not save changes to the '{self._database.display_name}' database",
                    cause=str(exc),
                    source=f"{_SOURCE}.connect",
                ) from exc
        finally:
            conn.close()
            logger.debug(
                "Database connection closed",
                extra={
                    "database": self._database.table,
                    "duration_ms": round((time.perf_counter() - _t0) * 1000, 3),
                },
            )

    # Schema inspection ---------------------------------------------------
    def table_exists(self, name: Optional[str] = None) -> bool:
        with self.connect() as conn:
            return self.table_exists_in(conn, name or self._database.table)

    def get_columns(self, name: Optional[str] = None) -> list[tuple[str, str]]:
        """Return ``(column_name, column_type)`` pairs in declaration order."""
        table = name or self._database.table
        with self.connect() as conn:
            if not self.table_exists_in(conn, table):
                raise NoSuchTableError(
                    f"Could not read the '{self._database.display_name}' database",
                    cause=f"The '{table}' table does not exist",
                    source=f"{_SOURCE}.get_columns",
                )
            try:
                rows = conn.execute("SELECT name, type FROM pragma_table_info(?)", (table,)).fetchall()
            except sqlite3.Error as exc:
                raise QueryError(
                    "Development Error",
                    cause=f"Invalid pragma query for '{table}':\n{exc}",
                    source=f"{_SOURCE}.get_columns",
                ) from exc
        return [decode_column(table, index, row) for index, row in enumerate(rows)]

    def drop_table(self, name: Optional[str] = None) -> None:
        table = name or self._database.table
        with self.connect() as conn:
            try:
                conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table)}")
            except sqlite3.Error as exc:
                raise WriteError(
                    f"Could not remove the '{self._database.display_name}' table",
                    cause=str(exc),
                    source=f"{_SOURCE}.drop_table",
                ) from exc
        logger.info("Table dropped", extra={"database": self._database.table, "table": table})

    @staticmethod
    def table_exists_in(conn: sqlite3.Connection, table: str) -> bool:
        try:
            row = conn.execute(
                "SELECT EXISTS (SELECT name FROM sqlite_master WHERE type='table' AND name=?)",
                (table,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise QueryError(
                f"Unable to check if the '{table}' table exists",
                cause=str(exc),
                source=f"{_SOURCE}.table_exists",
            ) from exc
        return bool(row and row[0])

    @staticmethod
    def _apply_pragmas(conn: sqlite3.Connection) -> None:
        conn.execute("PRAGMA foreign_keys=ON")
        # journal_mode returns a row and reads the header, so a non-database file fails here
        conn.execute("PRAGMA journal_mode=WAL").fetchone()
        conn.execute("PRAGMA synchronous=NORMAL")


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def decode_column(table: str, index: int, row: tuple) -> tuple[str, str]:
    """Decode one ``pragma_table_info`` row; undecodable values fail the listing."""
    col_name, col_type = row[0], row[1]
    if not isinstance(col_name, str) or not isinstance(col_type, str):
        raise QueryError(
            "Development Error",
            cause=f"Could not decode column {index} of the '{table}' table: {row!r}",
            source=f"{_SOURCE}.get_columns",
        )
    return col_name, col_type


__all__ = ["Database", "SQLiteAdapter", "decode_column", "quote_identifier"]
