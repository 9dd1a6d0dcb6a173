from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from src.app.dialogs.settings_dialog import SettingsDialog
from src.core.config import AppConfig
from src.core.responses import ErrorResponse, Toast, WarningResponse
from src.logging.config import configure_logging
from src.logging.gui_bridge import build_gui_handler
from src.services.settings_service import SettingsService


def main(argv: Optional[Sequence[str]] = None, *, config: Optional[AppConfig] = None) -> int:
    app = QApplication.instance() or QApplication(list(argv if argv is not None else sys.argv))
    config = config or AppConfig()
    configure_logging(level=config.log_level)
    logger = logging.getLogger(__name__)

    service = SettingsService.from_config(config)
    init_response = service.initialize_database()
    current = service.get_settings()
    notifications_enabled = not isinstance(current, ErrorResponse) and current.data.db_notifs

    dialog = SettingsDialog(service)
    handler = build_gui_handler(dialog.toast_panel.append_toast, notifications_enabled=notifications_enabled)
    configure_logging(lambda: handler, level=config.log_level)

    if isinstance(init_response, WarningResponse):
        dialog.toast_panel.append_toast(
            Toast.warning(init_response.category, init_response.message, init_response.cause)
        )
    elif isinstance(init_response, ErrorResponse):
        dialog.toast_panel.append_toast(
            Toast.error(init_response.category, init_response.message, init_response.cause)
        )

    def on_accepted() -> None:
        handler.notifications_enabled = dialog.chk_db_notifs.isChecked()
        logger.info("Settings dialog accepted")

    dialog.accepted.connect(on_accepted)
    dialog.show()
    try:
        return app.exec()
    finally:
        logging.getLogger().removeHandler(handler)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
