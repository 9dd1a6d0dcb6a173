from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QVBoxLayout,
)

from src.core.responses import ErrorResponse, Response, Toast
from src.services.settings_service import SettingsService
from src.services.settings_store import Settings, Theme, default_settings
from src.ui.toast_panel import ToastPanel


class SettingsDialog(QDialog):
    """Application settings dialog.

    Loads through ``SettingsService.get_settings`` and saves through
    ``update_settings``; failed commands are shown in the toast panel and
    re-emitted via ``toast_raised``.
    """

    toast_raised = Signal(object)

    def __init__(self, service: SettingsService, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self._service = service

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("General"))

        form = QFormLayout()
        self.cmb_theme = QComboBox()
        for theme in Theme:
            self.cmb_theme.addItem(theme.name.capitalize(), theme.name)
        form.addRow("Theme", self.cmb_theme)
        layout.addLayout(form)

        self.chk_welcome_screen = QCheckBox("Show the Welcome screen on startup")
        self.chk_db_notifs = QCheckBox("Show database notifications")
        self.chk_confirm_rename = QCheckBox("Ask for confirmation before renaming")
        layout.addWidget(self.chk_welcome_screen)
        layout.addWidget(self.chk_db_notifs)
        layout.addWidget(self.chk_confirm_rename)

        self.toast_panel = ToastPanel(self)
        layout.addWidget(self.toast_panel)

        bb = QDialogButtonBox(
            QDialogButtonBox.Ok | QDialogButtonBox.Cancel | QDialogButtonBox.RestoreDefaults,
            parent=self,
        )
        bb.accepted.connect(self.accept)
        bb.rejected.connect(self.reject)
        bb.button(QDialogButtonBox.RestoreDefaults).clicked.connect(self.restore_defaults)
        layout.addWidget(bb)

        self._load_state()

    def _load_state(self) -> None:
        response = self._service.get_settings()
        if isinstance(response, ErrorResponse):
            self._raise_toast(response)
            self._apply(default_settings())
            return
        self._apply(response.data)

    def _apply(self, settings: Settings) -> None:
        self.cmb_theme.setCurrentIndex(self.cmb_theme.findData(settings.theme.name))
        self.chk_welcome_screen.setChecked(settings.welcome_screen)
        self.chk_db_notifs.setChecked(settings.db_notifs)
        self.chk_confirm_rename.setChecked(settings.confirm_rename)

    def save_state(self) -> Response[Settings]:
        response = self._service.update_settings(
            self.cmb_theme.currentData(),
            self.chk_welcome_screen.isChecked(),
            self.chk_db_notifs.isChecked(),
            self.chk_confirm_rename.isChecked(),
        )
        if isinstance(response, ErrorResponse):
            self._raise_toast(response)
        return response

    def restore_defaults(self) -> None:
        response = self._service.reset_settings()
        if isinstance(response, ErrorResponse):
            self._raise_toast(response)
            return
        self._apply(response.data)

    def accept(self) -> None:  # type: ignore[override]
        if self.save_state().ok:
            super().accept()

    def _raise_toast(self, response: ErrorResponse) -> None:
        toast = Toast.error(response.category, response.message, response.cause or None)
        self.toast_panel.append_toast(toast)
        self.toast_raised.emit(toast)


__all__ = ["SettingsDialog"]
