from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.core.errors import CorruptRowError, ReadError, ValidationError, WriteError
from src.storage.sqlite_adapter import SQLiteAdapter, quote_identifier

SETTINGS_ID = "main"
_SOURCE = "src.services.settings_store"

# Expected (column_name, column_type) pairs, in declaration order
SETTINGS_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "TEXT"),
    ("theme", "INTEGER"),
    ("welcome_screen", "INTEGER"),
    ("db_notifs", "INTEGER"),
    ("confirm_rename", "INTEGER"),
)


def _stored_int(column: str) -> str:
    # TEXT-affinity columns from older layouts hold '0' / '1' strings
    return f"CASE WHEN typeof({column}) = 'text' AND {column} IN ('0', '1') THEN CAST({column} AS INTEGER) ELSE {column} END"


_SELECT_COLUMNS = ", ".join(_stored_int(name) for name, _ in SETTINGS_COLUMNS[1:])


class Theme(Enum):
    DARK = 0
    LIGHT = 1


@dataclass(frozen=True, slots=True)
class Settings:
    """App-wide settings as seen by the GUI.

    Build instances through ``parse_settings`` or ``default_settings`` so the
    theme is validated and canonicalized.
    """

    theme: Theme
    welcome_screen: bool
    db_notifs: bool
    confirm_rename: bool

    def as_payload(self) -> dict[str, Any]:
        return {
            "theme": self.theme.name,
            "welcome_screen": self.welcome_screen,
            "db_notifs": self.db_notifs,
            "confirm_rename": self.confirm_rename,
        }


@dataclass(frozen=True, slots=True)
class SettingsRow:
    """Storage encoding of ``Settings``; every field is expected to be 0 or 1."""

    theme: Any
    welcome_screen: Any
    db_notifs: Any
    confirm_rename: Any


def default_settings() -> Settings:
    return Settings(
        theme=Theme.DARK,
        welcome_screen=True,
        db_notifs=False,
        confirm_rename=True,
    )


def parse_settings(theme: str, welcome_screen: bool, db_notifs: bool, confirm_rename: bool) -> Settings:
    """Validate raw values coming from the GUI; ``theme`` is case-insensitive."""
    message = "Invalid data was provided for 'Settings'"
    normalized = str(theme).upper()
    try:
        parsed_theme = Theme[normalized]
    except KeyError:
        raise ValidationError(
            message,
            cause=f"'{theme}' is not a valid value for 'theme'",
            source=f"{_SOURCE}.parse_settings",
        ) from None
    flags = {
        "welcome_screen": welcome_screen,
        "db_notifs": db_notifs,
        "confirm_rename": confirm_rename,
    }
    for key, value in flags.items():
        if not isinstance(value, bool):
            raise ValidationError(
                message,
                cause=f"'{value!r}' is not a valid value for '{key}'",
                source=f"{_SOURCE}.parse_settings",
            )
    return Settings(parsed_theme, welcome_screen, db_notifs, confirm_rename)


def encode(settings: Settings) -> SettingsRow:
    return SettingsRow(
        theme=settings.theme.value,
        welcome_screen=int(settings.welcome_screen),
        db_notifs=int(settings.db_notifs),
        confirm_rename=int(settings.confirm_rename),
    )


def decode(row: SettingsRow) -> Settings:
    """Convert a stored row back to ``Settings``; fails on anything but 0/1."""
    return Settings(
        theme=Theme(_validate_0_or_1("theme", row.theme)),
        welcome_screen=bool(_validate_0_or_1("welcome_screen", row.welcome_screen)),
        db_notifs=bool(_validate_0_or_1("db_notifs", row.db_notifs)),
        confirm_rename=bool(_validate_0_or_1("confirm_rename", row.confirm_rename)),
    )


def _validate_0_or_1(key: str, value: Any) -> int:
    # bool is an int subclass, but sqlite never hands one back
    if isinstance(value, int) and not isinstance(value, bool) and value in (0, 1):
        return value
    raise CorruptRowError(
        "Unable to parse the 'Settings' data from the database due to invalid data",
        cause=f"The '{key}' value should be either 0 or 1, but found {value!r}",
        source=f"{_SOURCE}.decode",
        field=key,
        value=value,
    )


class SettingsStore:
    """Reads and writes the singleton settings row (``id = 'main'``).

    Each call opens its own connection through the adapter. ``write`` fully
    replaces the row; concurrent writers resolve as last-writer-wins.
    """

    def __init__(self, adapter: SQLiteAdapter) -> None:
        self._adapter = adapter
        self._table = adapter.database.table
        self._quoted = quote_identifier(self._table)
        self._display_name = adapter.database.display_name
        self._logger = logging.getLogger(__name__)

    @property
    def adapter(self) -> SQLiteAdapter:
        return self._adapter

    def read(self) -> Settings:
        with self._adapter.connect() as conn:
            self._ensure_table(conn)
            try:
                row = conn.execute(
                    f"SELECT {_SELECT_COLUMNS} FROM {self._quoted} WHERE id = ?",
                    (SETTINGS_ID,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise ReadError(
                    f"Unable to read values from the '{self._display_name}' database",
                    cause=str(exc),
                    source=f"{_SOURCE}.SettingsStore.read",
                ) from exc
        if row is None:
            self._logger.info(
                "No stored settings, writing defaults",
                extra={"operation": "read", "database": self._table},
            )
            defaults = default_settings()
            self.write(defaults)
            return defaults
        try:
            return decode(SettingsRow(*row))
        except CorruptRowError as exc:
            self._logger.error(
                "Stored settings are corrupt",
                extra={"operation": "read", "field": exc.field, "value": exc.value},
            )
            raise

    def write(self, settings: Settings) -> None:
        encoded = encode(settings)
        with self._adapter.connect() as conn:
            self._ensure_table(conn)
            try:
                conn.execute(
                    f"INSERT OR REPLACE INTO {self._quoted} "
                    "(id, theme, welcome_screen, db_notifs, confirm_rename) VALUES (?, ?, ?, ?, ?)",
                    (
                        SETTINGS_ID,
                        encoded.theme,
                        encoded.welcome_screen,
                        encoded.db_notifs,
                        encoded.confirm_rename,
                    ),
                )
            except sqlite3.Error as exc:
                raise WriteError(
                    f"Could not write '{self._display_name}' data to the database",
                    cause=str(exc),
                    source=f"{_SOURCE}.SettingsStore.write",
                ) from exc
        self._logger.info(
            "Settings written",
            extra={"operation": "write", "database": self._table, "theme": settings.theme.name},
        )

    def reset(self) -> Settings:
        defaults = default_settings()
        self.write(defaults)
        return defaults

    def initialize(self) -> list[str]:
        """Create the table when absent and report column deviations, if any.

        A table missing an expected column, or declaring one with another type,
        cannot round-trip settings and is rebuilt; the stored row is dropped
        with it and the next ``read()`` writes defaults. Extra columns alone
        are only reported.
        """
        with self._adapter.connect() as conn:
            self._ensure_table(conn)
        columns = self._adapter.get_columns()
        deviations = describe_column_deviations(columns)
        if not deviations:
            return deviations
        context = {"operation": "initialize", "deviations": "; ".join(deviations)}
        if needs_rebuild(columns):
            with self._adapter.connect() as conn:
                try:
                    conn.execute(f"DROP TABLE IF EXISTS {self._quoted}")
                except sqlite3.Error as exc:
                    raise WriteError(
                        f"Could not rebuild the '{self._display_name}' table",
                        cause=str(exc),
                        source=f"{_SOURCE}.SettingsStore.initialize",
                    ) from exc
                self._ensure_table(conn)
            self._logger.warning("Settings table rebuilt with the expected columns", extra=context)
        else:
            self._logger.warning("Settings table columns deviate from the expected schema", extra=context)
        return deviations

    def table_exists(self) -> bool:
        return self._adapter.table_exists()

    def get_columns(self) -> list[tuple[str, str]]:
        return self._adapter.get_columns()

    def drop_table(self) -> None:
        self._adapter.drop_table()

    def _ensure_table(self, conn: sqlite3.Connection) -> None:
        columns = ",\n".join(
            f"{name} {col_type} PRIMARY KEY" if name == "id" else f"{name} {col_type} NOT NULL"
            for name, col_type in SETTINGS_COLUMNS
        )
        try:
            conn.execute(f"CREATE TABLE IF NOT EXISTS {self._quoted} (\n{columns}\n)")
        except sqlite3.Error as exc:
            raise WriteError(
                f"Could not create the '{self._display_name}' table",
                cause=str(exc),
                source=f"{_SOURCE}.SettingsStore.ensure_table",
            ) from exc


def describe_column_deviations(columns: list[tuple[str, str]]) -> list[str]:
    expected = dict(SETTINGS_COLUMNS)
    actual = {name: col_type.upper() for name, col_type in columns}
    issues: list[str] = []
    for name, col_type in SETTINGS_COLUMNS:
        if name not in actual:
            issues.append(f"Missing column '{name}'")
        elif actual[name] != col_type:
            issues.append(f"Column '{name}' has type '{actual[name]}', expected '{col_type}'")
    for name in actual:
        if name not in expected:
            issues.append(f"Unexpected column '{name}'")
    return issues


def needs_rebuild(columns: list[tuple[str, str]]) -> bool:
    actual = {name: col_type.upper() for name, col_type in columns}
    return any(actual.get(name) != col_type for name, col_type in SETTINGS_COLUMNS)


__all__ = [
    "SETTINGS_ID",
    "SETTINGS_COLUMNS",
    "Theme",
    "Settings",
    "SettingsRow",
    "default_settings",
    "parse_settings",
    "encode",
    "decode",
    "SettingsStore",
    "describe_column_deviations",
    "needs_rebuild",
]
