from __future__ import annotations

import logging
from typing import Callable, Mapping

from src.core.errors import CATEGORY
from src.core.responses import Toast, ToastType

SEVERITY_MAP: Mapping[int, ToastType] = {
    logging.DEBUG: ToastType.INFO,
    logging.INFO: ToastType.INFO,
    logging.WARNING: ToastType.WARNING,
    logging.ERROR: ToastType.ERROR,
    logging.CRITICAL: ToastType.ERROR,
}

DATABASE_LOGGERS = ("src.lib", "src.storage", "src.services")


def toast_from_record(record: logging.LogRecord) -> Toast:
    toast_type = SEVERITY_MAP.get(record.levelno, ToastType.INFO)
    cause = getattr(record, "cause", None)
    return Toast(toast_type, CATEGORY, record.getMessage(), str(cause) if cause else None)


class DatabaseNotificationHandler(logging.Handler):
    """Forward database log records to the GUI as toasts.

    INFO records are only forwarded while database notifications are enabled
    (the ``db_notifs`` setting); warnings and errors always are.
    """

    def __init__(
        self,
        emitter: Callable[[Toast], None],
        *,
        notifications_enabled: bool = False,
        loggers: tuple[str, ...] = DATABASE_LOGGERS,
    ) -> None:
        super().__init__(level=logging.INFO)
        self._emitter = emitter
        self._loggers = loggers
        self.notifications_enabled = notifications_enabled

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        if not self._is_database_record(record):
            return
        if record.levelno < logging.WARNING and not self.notifications_enabled:
            return
        try:
            self._emitter(toast_from_record(record))
        except Exception:  # pragma: no cover - defensive bridge
            self.handleError(record)

    def _is_database_record(self, record: logging.LogRecord) -> bool:
        return any(record.name == name or record.name.startswith(name + ".") for name in self._loggers)


def build_gui_handler(
    emitter: Callable[[Toast], None], *, notifications_enabled: bool = False
) -> DatabaseNotificationHandler:
    return DatabaseNotificationHandler(emitter, notifications_enabled=notifications_enabled)


__all__ = [
    "DatabaseNotificationHandler",
    "build_gui_handler",
    "toast_from_record",
    "SEVERITY_MAP",
    "DATABASE_LOGGERS",
]
