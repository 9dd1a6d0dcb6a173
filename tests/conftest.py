from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest
from PySide6 import QtWidgets

from src.core.config import AppConfig
from src.services.settings_store import SettingsStore
from src.storage.sqlite_adapter import Database, SQLiteAdapter

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app() -> Iterator[QtWidgets.QApplication]:
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(data_dir=tmp_path / "data")


@pytest.fixture()
def adapter(config: AppConfig) -> SQLiteAdapter:
    return SQLiteAdapter(Database.SETTINGS, config)


@pytest.fixture()
def store(adapter: SQLiteAdapter) -> SettingsStore:
    return SettingsStore(adapter)
