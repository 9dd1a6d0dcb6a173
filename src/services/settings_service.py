from __future__ import annotations

import logging
from typing import Optional

from src.core.config import AppConfig
from src.core.errors import CATEGORY, StoreError
from src.core.responses import ErrorResponse, Info, OkResponse, Response
from src.services.settings_store import Settings, SettingsStore, parse_settings
from src.storage.sqlite_adapter import Database, SQLiteAdapter

_SOURCE = "src.services.settings_service"


class SettingsService:
    """Command surface used by the GUI.

    Every command returns an envelope instead of raising: ``Info``/``WarningResponse``
    on success, ``ErrorResponse`` when the store reports a ``StoreError``.
    """

    def __init__(self, store: SettingsStore) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "SettingsService":
        adapter = SQLiteAdapter(Database.SETTINGS, config or AppConfig())
        return cls(SettingsStore(adapter))

    @property
    def store(self) -> SettingsStore:
        return self._store

    def get_settings(self) -> Response[Settings]:
        try:
            settings = self._store.read()
        except StoreError as exc:
            return self._failed("get_settings", exc)
        return OkResponse.new_info(CATEGORY, "The 'Settings' have been loaded", settings)

    def update_settings(
        self,
        theme: str,
        welcome_screen: bool,
        db_notifs: bool,
        confirm_rename: bool,
    ) -> Response[Settings]:
        try:
            settings = parse_settings(theme, welcome_screen, db_notifs, confirm_rename)
            self._store.write(settings)
        except StoreError as exc:
            return self._failed("update_settings", exc)
        return OkResponse.new_info(CATEGORY, "The 'Settings' have been updated", settings)

    def reset_settings(self) -> Response[Settings]:
        try:
            settings = self._store.reset()
        except StoreError as exc:
            return self._failed("reset_settings", exc)
        return OkResponse.new_info(CATEGORY, "The 'Settings' have been reset", settings)

    def initialize_database(self) -> Response[None]:
        try:
            deviations = self._store.initialize()
        except StoreError as exc:
            return self._failed("initialize_database", exc)
        if deviations:
            return OkResponse.new_warning(
                CATEGORY,
                "The 'Settings' table does not match the expected layout",
                "; ".join(deviations),
                f"{_SOURCE}.initialize_database",
            )
        return Info(category=CATEGORY, message="The database has been initialized")

    def _failed(self, operation: str, exc: StoreError) -> ErrorResponse:
        self._logger.error(
            exc.message,
            extra={"operation": operation, "kind": exc.kind.value, "cause": exc.cause},
        )
        return exc.to_response()


__all__ = ["SettingsService"]
