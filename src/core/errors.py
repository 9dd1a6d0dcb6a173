from __future__ import annotations

from enum import Enum

from src.core.responses import ErrorResponse, Toast

CATEGORY = "Database"


class UserFacingError(Exception):
    """Base exception carrying user-presentable context."""

    def __init__(self, message: str, *, title: str, remediation: str | None = None) -> None:
        super().__init__(message)
        self.title = title
        self.remediation = remediation or ""


class ErrorKind(str, Enum):
    DIRECTORY_UNAVAILABLE = "DirectoryUnavailable"
    DIRECTORY_CREATE_FAILED = "DirectoryCreateFailed"
    CONNECTION_OPEN_FAILED = "ConnectionOpenFailed"
    SCHEMA_QUERY_FAILED = "SchemaQueryFailed"
    TABLE_MISSING = "TableMissing"
    VALIDATION_FAILED = "ValidationFailed"
    READ_FAILED = "ReadFailed"
    WRITE_FAILED = "WriteFailed"


class StoreError(UserFacingError):
    """A settings-store failure converted at its origin.

    ``message`` is what the user sees, ``cause`` is the lower-level reason
    (usually the sqlite or OS error text) and ``source`` names the function
    that produced the error.
    """

    kind: ErrorKind = ErrorKind.READ_FAILED
    title: str = "Database Error"

    def __init__(
        self,
        message: str,
        *,
        cause: str = "",
        source: str = "",
        kind: ErrorKind | None = None,
        remediation: str | None = None,
    ) -> None:
        super().__init__(message, title=type(self).title, remediation=remediation)
        if kind is not None:
            self.kind = kind
        self.category = CATEGORY
        self.message = message
        self.cause = cause
        self.source = source

    def to_toast(self) -> Toast:
        return Toast.error(self.category, self.message, self.cause or None)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            category=self.category,
            message=self.message,
            cause=self.cause,
            source=self.source,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, cause={self.cause!r})"


class DirectoryError(StoreError):
    kind = ErrorKind.DIRECTORY_UNAVAILABLE
    title = "Data Directory Unavailable"


class ConnectionError(StoreError):  # type: ignore[override]
    """Opening the database file failed (not Python's built-in)."""

    kind = ErrorKind.CONNECTION_OPEN_FAILED
    title = "Database Unavailable"


class QueryError(StoreError):
    """A static schema query failed; indicates a programming error."""

    kind = ErrorKind.SCHEMA_QUERY_FAILED
    title = "Development Error"


class NoSuchTableError(StoreError):
    kind = ErrorKind.TABLE_MISSING
    title = "Table Missing"


class ValidationError(StoreError):
    kind = ErrorKind.VALIDATION_FAILED
    title = "Invalid Settings"


class CorruptRowError(ValidationError):
    """A stored value is outside the 0/1 encoding."""

    title = "Corrupt Settings"

    def __init__(self, message: str, *, field: str, value: object, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class ReadError(StoreError):
    kind = ErrorKind.READ_FAILED
    title = "Settings Read Failed"


class WriteError(StoreError):
    kind = ErrorKind.WRITE_FAILED
    title = "Settings Write Failed"


__all__ = [
    "CATEGORY",
    "UserFacingError",
    "ErrorKind",
    "StoreError",
    "DirectoryError",
    "ConnectionError",
    "QueryError",
    "NoSuchTableError",
    "ValidationError",
    "CorruptRowError",
    "ReadError",
    "WriteError",
]
