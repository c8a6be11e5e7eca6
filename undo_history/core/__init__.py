"""Core — actions, bounded stack and the undo/redo history (no Qt)."""

from undo_history.core.actions import (
    Action,
    CallbackAction,
    GroupAction,
    MultiAction,
    Undoable,
)
from undo_history.core.history import History, HistoryState
from undo_history.core.sized_stack import SizedStack

__all__ = [
    "Action",
    "CallbackAction",
    "GroupAction",
    "MultiAction",
    "Undoable",
    "History",
    "HistoryState",
    "SizedStack",
]
