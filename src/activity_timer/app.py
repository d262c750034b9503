from __future__ import annotations

import sys
import logging
import os
from dataclasses import dataclass

from PyQt6.QtGui import QAction, QIcon
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon, QWidget

from .activity_controller import ActivityController
from .api_client import ApiClient, ApiClientConfig
from .config import AppConfig, load_config
from .entity_store import EntityStore
from .keys import load_token, redact
from .logging_setup import configure_logging
from .notifier import NOTIFICATION_ICON, TrayNotifier, compose_message
from .toast import ToastErrorReporter

APP_NAME = "Activity Timer"
TOKEN_ENV = "ACTIVITY_TIMER_TOKEN"


@dataclass(slots=True)
class AppState:
    config: AppConfig
    api: ApiClient
    store: EntityStore
    controller: ActivityController


def get_app_state(tray: QSystemTrayIcon, parent: QWidget | None = None) -> AppState:  # pragma: no cover
    config = load_config()
    configure_logging(config.data_dir, config.log_level)
    token = load_token(config.data_dir) or os.environ.get(TOKEN_ENV, "")
    api = ApiClient(ApiClientConfig(base_url=config.api_url, token=token or None))
    store = EntityStore()
    controller = ActivityController(api, store, TrayNotifier(tray), ToastErrorReporter(parent))
    logging.getLogger(__name__).info(
        "app_state_created", extra={"_json_api_url": config.api_url, "_json_token": redact(token)}
    )
    return AppState(config=config, api=api, store=store, controller=controller)


class TrayApp(QWidget):  # pragma: no cover - UI heavy
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self._tray = QSystemTrayIcon(QIcon(str(NOTIFICATION_ICON)), self)
        self._tray.setToolTip(APP_NAME)
        self.state = get_app_state(self._tray, self)
        controller = self.state.controller

        menu = QMenu()
        self._act_working = QAction("No timer running", menu)
        self._act_working.setEnabled(False)
        self._act_stop = QAction("Stop Timer", menu)
        self._act_suspend = QAction("Stop on Suspend", menu)
        self._act_suspend.setCheckable(True)
        self._act_suspend.setChecked(controller.stop_on_suspend)
        self._act_shutdown = QAction("Stop on Shutdown", menu)
        self._act_shutdown.setCheckable(True)
        self._act_shutdown.setChecked(controller.stop_on_shutdown)
        act_refresh = QAction("Refresh", menu)
        act_quit = QAction("Quit", menu)
        for action in (self._act_working, self._act_stop, act_refresh):
            menu.addAction(action)
        menu.addSeparator()
        menu.addAction(self._act_suspend)
        menu.addAction(self._act_shutdown)
        menu.addSeparator()
        menu.addAction(act_quit)
        self._menu = menu
        self._tray.setContextMenu(menu)

        self._act_stop.triggered.connect(lambda: controller.stop())
        act_refresh.triggered.connect(lambda: controller.fetch_working())
        self._act_suspend.toggled.connect(controller.set_stop_on_suspend)
        self._act_shutdown.toggled.connect(controller.set_stop_on_shutdown)
        act_quit.triggered.connect(QApplication.instance().quit)  # type: ignore[arg-type]
        self.state.store.changed.connect(self._refresh_menu)

        self._tray.setVisible(True)
        controller.fetch_working()
        self._refresh_menu()

    def _refresh_menu(self) -> None:
        working = self.state.controller.working()
        if working is None:
            self._act_working.setText("No timer running")
            self._act_stop.setEnabled(False)
        else:
            self._act_working.setText(f"Running: {compose_message(working)}")
            self._act_stop.setEnabled(True)


def main() -> int:  # pragma: no cover
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)
    tray_app = TrayApp()
    try:
        return app.exec()
    finally:
        tray_app.state.api.close()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
