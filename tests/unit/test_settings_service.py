from __future__ import annotations

from pathlib import Path

from src.core.config import AppConfig
from src.core.responses import ErrorResponse, Info, WarningResponse
from src.services.settings_service import SettingsService
from src.services.settings_store import SETTINGS_COLUMNS, Settings, SettingsStore, Theme, default_settings


def test_get_settings_initializes_on_first_call(store: SettingsStore) -> None:
    service = SettingsService(store)

    response = service.get_settings()

    assert isinstance(response, Info)
    assert response.data == default_settings()
    assert response.category == "Database"


def test_update_then_get_round_trip(store: SettingsStore) -> None:
    service = SettingsService(store)

    updated = service.update_settings("light", False, True, False)
    loaded = service.get_settings()

    assert isinstance(updated, Info)
    assert updated.message == "The 'Settings' have been updated"
    assert loaded.data == Settings(Theme.LIGHT, False, True, False)


def test_update_with_invalid_theme_returns_error_and_keeps_state(store: SettingsStore) -> None:
    service = SettingsService(store)
    service.update_settings("light", False, True, False)

    response = service.update_settings("blue", True, True, True)

    assert isinstance(response, ErrorResponse)
    assert response.message == "Invalid data was provided for 'Settings'"
    assert "'blue'" in response.cause
    assert response.source == "src.services.settings_store.parse_settings"
    assert service.get_settings().data.theme is Theme.LIGHT


def test_reset_settings(store: SettingsStore) -> None:
    service = SettingsService(store)
    service.update_settings("light", False, True, False)

    response = service.reset_settings()

    assert response.data == default_settings()
    assert service.get_settings().data == default_settings()


def test_initialize_database_info_and_warning(store: SettingsStore) -> None:
    service = SettingsService(store)

    assert isinstance(service.initialize_database(), Info)

    store.drop_table()
    with store.adapter.connect() as conn:
        conn.execute("CREATE TABLE settings(id TEXT PRIMARY KEY, theme TEXT NOT NULL)")

    response = service.initialize_database()
    assert isinstance(response, WarningResponse)
    assert "Missing column 'welcome_screen'" in response.cause
    assert store.get_columns() == list(SETTINGS_COLUMNS)
    assert isinstance(service.initialize_database(), Info)


def test_directory_failure_becomes_error_response(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    service = SettingsService.from_config(AppConfig(data_dir=blocker))

    response = service.get_settings()

    assert isinstance(response, ErrorResponse)
    assert response.message == "Could not access the database directory"
    assert response.source == "src.lib.paths.ensure_database_dir"


def test_from_config_uses_injected_directory(tmp_path: Path) -> None:
    service = SettingsService.from_config(AppConfig(data_dir=tmp_path))

    service.get_settings()

    assert (tmp_path / "com.renamed.app" / "db" / "settings.db").exists()


def test_update_then_get_on_text_theme_table(store: SettingsStore) -> None:
    with store.adapter.connect() as conn:
        conn.execute(
            "CREATE TABLE settings(id TEXT PRIMARY KEY, theme TEXT NOT NULL, welcome_screen INTEGER NOT NULL, "
            "db_notifs INTEGER NOT NULL, confirm_rename INTEGER NOT NULL)"
        )
    service = SettingsService(store)

    assert isinstance(service.update_settings("light", False, True, False), Info)
    loaded = service.get_settings()

    assert isinstance(loaded, Info)
    assert loaded.data == Settings(Theme.LIGHT, False, True, False)


def test_write_failure_becomes_error_response(store: SettingsStore) -> None:
    with store.adapter.connect() as conn:
        conn.execute("CREATE TABLE settings(id TEXT PRIMARY KEY, theme INTEGER NOT NULL)")
    service = SettingsService(store)

    response = service.update_settings("light", False, True, False)

    assert isinstance(response, ErrorResponse)
    assert response.message == "Could not write 'Settings' data to the database"
    assert "no column named welcome_screen" in response.cause
    assert response.source == "src.services.settings_store.SettingsStore.write"
