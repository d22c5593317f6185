from __future__ import annotations

"""Eye Rest application entry point.

Sets up logging, opens the settings database, builds the reminder engine and
wires it to the system tray.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from eyerest.core.config import default_db_path, log_file_path, log_level
from eyerest.core.engine import ReminderEngine
from eyerest.core.notifications import TrayNotifier
from eyerest.core.settings import NUDGE_STEP_MINUTES
from eyerest.core.ticker import QtTicker
from eyerest.data.storage import Storage


logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configures the root logger with a rotating file and the console."""
    root = logging.getLogger()
    root.setLevel(log_level())

    file_handler = RotatingFileHandler(log_file_path(), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root.addHandler(console_handler)


def build_tray_menu(engine: ReminderEngine, app: QApplication) -> QMenu:
    menu = QMenu()

    start_action = QAction("Start Timer", menu)
    start_action.triggered.connect(engine.start_timing)
    menu.addAction(start_action)

    rest_action = QAction("Start Break", menu)
    rest_action.triggered.connect(engine.confirm_rest)
    menu.addAction(rest_action)

    skip_action = QAction("Skip Break", menu)
    skip_action.triggered.connect(engine.skip_rest)
    menu.addAction(skip_action)

    adjust_menu = menu.addMenu("Adjust")
    for label, nudge, step in (
        ("Work +0.5 min", engine.nudge_work_interval, NUDGE_STEP_MINUTES),
        ("Work -0.5 min", engine.nudge_work_interval, -NUDGE_STEP_MINUTES),
        ("Break +0.5 min", engine.nudge_break_duration, NUDGE_STEP_MINUTES),
        ("Break -0.5 min", engine.nudge_break_duration, -NUDGE_STEP_MINUTES),
    ):
        action = QAction(label, adjust_menu)
        action.triggered.connect(lambda _checked=False, nudge=nudge, step=step: nudge(step))
        adjust_menu.addAction(action)

    menu.addSeparator()
    quit_action = QAction("Quit", menu)
    quit_action.triggered.connect(app.quit)
    menu.addAction(quit_action)

    def refresh() -> None:
        start_action.setEnabled(engine.needs_manual_start)
        rest_action.setEnabled(engine.can_confirm_rest)
        skip_action.setEnabled(not engine.can_confirm_rest and engine.allow_exit_fullscreen_during_break)

    engine.state_changed.connect(refresh)
    refresh()
    return menu


def main() -> int:
    """Creates the application dependencies and runs the Qt event loop."""
    setup_logging()
    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    storage = Storage(default_db_path())
    storage.init_db()
    logger.info("Using settings database %s", storage.db_path)

    tray_icon = QSystemTrayIcon(app.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon))
    engine = ReminderEngine(storage=storage, notifier=TrayNotifier(tray_icon), ticker=QtTicker())
    tray_icon.messageClicked.connect(engine.confirm_rest)

    menu = build_tray_menu(engine, app)
    tray_icon.setContextMenu(menu)
    engine.state_changed.connect(lambda: tray_icon.setToolTip(f"{engine.mode_title}\n{engine.countdown_line}"))
    tray_icon.show()

    engine.activate()
    app.aboutToQuit.connect(engine.stop_ticking)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
