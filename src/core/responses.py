"""Envelopes returned to the GUI layer.

Two shapes coexist:

- ``Toast``: short-lived notification (severity, category, message, details)
- ``OkResponse`` / ``ErrorResponse``: command results, where the ok side is
  either ``Info`` or ``WarningResponse`` and may carry a data payload

They hold data only; conversion from exceptions lives in ``src.core.errors``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ToastType(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class Toast:
    toast_type: ToastType
    category: str
    message: str
    details: Optional[str] = None

    @classmethod
    def info(cls, category: str, message: str, details: Optional[str] = None) -> "Toast":
        return cls(ToastType.INFO, category, message, details)

    @classmethod
    def warning(cls, category: str, message: str, details: Optional[str] = None) -> "Toast":
        return cls(ToastType.WARNING, category, message, details)

    @classmethod
    def error(cls, category: str, message: str, details: Optional[str] = None) -> "Toast":
        return cls(ToastType.ERROR, category, message, details)

    def as_payload(self) -> dict[str, Any]:
        return {
            "toast_type": self.toast_type.value,
            "category": self.category,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    category: str
    message: str
    cause: str
    source: str

    @property
    def ok(self) -> bool:
        return False

    def as_payload(self) -> dict[str, Any]:
        return {
            "type": "ERROR",
            "category": self.category,
            "message": self.message,
            "cause": self.cause,
            "source": self.source,
        }


class OkResponse(Generic[T]):
    """Successful command result; concrete variants are ``Info`` and ``WarningResponse``."""

    data: Optional[T]

    @property
    def ok(self) -> bool:
        return True

    @staticmethod
    def new_info(category: str, message: str, data: Optional[T] = None) -> "Info[T]":
        return Info(category=category, message=message, data=data)

    @staticmethod
    def new_warning(
        category: str,
        message: str,
        cause: str,
        source: str,
        data: Optional[T] = None,
    ) -> "WarningResponse[T]":
        return WarningResponse(category=category, message=message, cause=cause, source=source, data=data)


@dataclass(frozen=True)
class Info(OkResponse[T]):
    category: str
    message: str
    data: Optional[T] = None

    def as_payload(self) -> dict[str, Any]:
        return {
            "type": "INFO",
            "category": self.category,
            "message": self.message,
            "data": _payload_of(self.data),
        }


@dataclass(frozen=True)
class WarningResponse(OkResponse[T]):
    """Success with a caveat."""

    category: str
    message: str
    cause: str
    source: str
    data: Optional[T] = None

    def as_payload(self) -> dict[str, Any]:
        return {
            "type": "WARN",
            "category": self.category,
            "message": self.message,
            "cause": self.cause,
            "source": self.source,
            "data": _payload_of(self.data),
        }


Response = Union[Info[T], WarningResponse[T], ErrorResponse]


def _payload_of(data: Any) -> Any:
    if data is None:
        return None
    as_payload = getattr(data, "as_payload", None)
    if callable(as_payload):
        return as_payload()
    if isinstance(data, (list, tuple)):
        return [_payload_of(item) for item in data]
    return data


__all__ = [
    "ToastType",
    "Toast",
    "ErrorResponse",
    "OkResponse",
    "Info",
    "WarningResponse",
    "Response",
]
