from __future__ import annotations

from PySide6 import QtWidgets

from src.core.errors import UserFacingError
from src.core.responses import ErrorResponse, Toast, ToastType
from src.services.settings_store import Settings


def show_error(parent: QtWidgets.QWidget | None, title: str, message: str) -> None:
    QtWidgets.QMessageBox.critical(parent, title, message)


def show_warning(parent: QtWidgets.QWidget | None, title: str, message: str) -> None:
    QtWidgets.QMessageBox.warning(parent, title, message)


def show_info(parent: QtWidgets.QWidget | None, title: str, message: str) -> None:
    QtWidgets.QMessageBox.information(parent, title, message)


def show_toast(parent: QtWidgets.QWidget | None, toast: Toast) -> None:
    body = toast.message
    if toast.details:
        body = f"{body}\n\n{toast.details}"
    if toast.toast_type is ToastType.ERROR:
        show_error(parent, toast.category, body)
    elif toast.toast_type is ToastType.WARNING:
        show_warning(parent, toast.category, body)
    else:
        show_info(parent, toast.category, body)


def show_error_response(parent: QtWidgets.QWidget | None, response: ErrorResponse) -> None:
    show_toast(parent, Toast.error(response.category, response.message, response.cause or None))


def ask_confirmation(
    parent: QtWidgets.QWidget | None,
    title: str,
    message: str,
    *,
    default_yes: bool = False,
) -> bool:
    buttons = QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
    default = QtWidgets.QMessageBox.Yes if default_yes else QtWidgets.QMessageBox.No
    response = QtWidgets.QMessageBox.question(parent, title, message, buttons, default)
    return response == QtWidgets.QMessageBox.Yes


def confirm_rename(parent: QtWidgets.QWidget | None, settings: Settings, old_name: str, new_name: str) -> bool:
    """Ask before renaming unless the user turned the confirmation off."""
    if not settings.confirm_rename:
        return True
    return ask_confirmation(
        parent,
        "Confirm Rename",
        f"Rename '{old_name}' to '{new_name}'?",
        default_yes=True,
    )


def show_user_error(parent: QtWidgets.QWidget | None, error: UserFacingError) -> None:
    body = error.args[0] if error.args else "An error occurred."
    if error.remediation:
        body = f"{body}\n\n{error.remediation}"
    QtWidgets.QMessageBox.critical(parent, error.title, body)


__all__ = [
    "show_error",
    "show_warning",
    "show_info",
    "show_toast",
    "show_error_response",
    "ask_confirmation",
    "confirm_rename",
    "show_user_error",
]
