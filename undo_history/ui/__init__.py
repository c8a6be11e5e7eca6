"""UI — Qt binding for History and the demo editor window."""

from undo_history.ui.qt_history import QtHistory

__all__ = [
    "QtHistory",
]
