"""Paths utilities for the settings databases

- Resolves the user-scope application data directory
- Creates the per-application ``db`` directory
- Normalizes database short names into file names
"""
from __future__ import annotations

import logging
from pathlib import Path

import platformdirs

from src.core.config import AppConfig
from src.core.errors import DirectoryError, ErrorKind

_DB_DIR_NAME = "db"
_DB_SUFFIX = ".db"
_SOURCE = "src.lib.paths"

logger = logging.getLogger(__name__)


def get_user_data_dir(config: AppConfig) -> Path:
    """Return the base per-user data directory.

    Uses the injected ``config.data_dir`` when set, otherwise asks platformdirs
    for the OS default (``%APPDATA%``, ``~/Library/Application Support``,
    ``$XDG_DATA_HOME``...).
    """
    if config.data_dir is not None:
        return Path(config.data_dir)
    try:
        base = platformdirs.user_data_dir()
    except Exception as exc:
        raise DirectoryError(
            "Could not access the database directory",
            cause=str(exc) or "The data directory path was not found",
            source=f"{_SOURCE}.get_user_data_dir",
        ) from exc
    if not base:
        raise DirectoryError(
            "Could not access the database directory",
            cause="The data directory path was not found",
            source=f"{_SOURCE}.get_user_data_dir",
        )
    return Path(base)


def get_database_dir(config: AppConfig) -> Path:
    return get_user_data_dir(config) / config.app_id / _DB_DIR_NAME


def ensure_database_dir(config: AppConfig) -> Path:
    """Ensure ``<data_dir>/<app_id>/db`` exists and return it."""
    p = get_database_dir(config)
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Database directory creation failed", extra={"path": str(p)})
        raise DirectoryError(
            "Could not access the database directory",
            cause=str(exc),
            source=f"{_SOURCE}.ensure_database_dir",
            kind=ErrorKind.DIRECTORY_CREATE_FAILED,
        ) from exc
    return p


def database_filename(name: str) -> str:
    """Lower-case ``name`` and append ``.db`` when missing."""
    filename = name.lower()
    if not filename.endswith(_DB_SUFFIX):
        filename += _DB_SUFFIX
    return filename


def database_path(config: AppConfig, name: str) -> Path:
    """Return the full path of the database file, creating its directory."""
    return ensure_database_dir(config) / database_filename(name)


__all__ = [
    "get_user_data_dir",
    "get_database_dir",
    "ensure_database_dir",
    "database_filename",
    "database_path",
]
