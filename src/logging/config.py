from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

JSON_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_STANDARD_RECORD_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Emit log records as compact JSON; ``extra`` fields land under ``context``."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = self._extract_extras(record)
        if extras:
            payload["context"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=True)

    def _extract_extras(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: self._stringify(value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        }

    @staticmethod
    def _stringify(value: Any) -> Any:
        if isinstance(value, (str, int, float, bool)) or value is None:
            return value
        return str(value)


def configure_logging(
    gui_handler_factory: Optional[Callable[[], logging.Handler]] = None,
    *,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure root logger with JSON output and an optional GUI handler."""

    root = logging.getLogger()
    root.setLevel(level)

    if not _has_stream_handler(root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
        root.addHandler(stream_handler)

    if gui_handler_factory:
        gui_handler = gui_handler_factory()
        root.addHandler(gui_handler)

    return root


def _has_stream_handler(handlers: list[logging.Handler]) -> bool:
    # FileHandler subclasses StreamHandler but does not count as console output
    return any(
        isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
        for handler in handlers
    )


__all__ = ["JsonFormatter", "configure_logging", "JSON_LOG_FORMAT"]
