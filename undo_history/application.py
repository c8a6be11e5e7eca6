"""Application factory — QApplication creation and logging setup."""

import logging
import sys

from PyQt6.QtCore import qInstallMessageHandler, QtMsgType
from PyQt6.QtWidgets import QApplication

from undo_history.constants import APP_NAME, APP_ORGANIZATION


def _qt_message_handler(msg_type, context, message):
    """Forward Qt warnings and errors to stderr, drop debug/info chatter."""
    if msg_type in (QtMsgType.QtWarningMsg, QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
        print(message, file=sys.stderr)


def configure_logging(level: int = logging.INFO) -> None:
    """Install a basic stderr handler for the demo application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_application(argv: list[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    qInstallMessageHandler(_qt_message_handler)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_ORGANIZATION)
    return app
