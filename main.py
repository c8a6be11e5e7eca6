"""Undo History demo — Entry Point."""
import logging
import sys

from undo_history.application import configure_logging, create_application
from undo_history.ui.main_window import MainWindow


def main():
    configure_logging(logging.DEBUG if "--debug" in sys.argv else logging.INFO)
    app = create_application(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
