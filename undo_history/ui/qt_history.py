"""Qt binding for History — mirrors history state into Qt signals.

Wraps a core ``History`` and re-emits its state notifications so menus
and buttons can bind to them. All mutators must be called from the
thread that owns this QObject (normally the GUI thread).
"""

from __future__ import annotations

import functools
import weakref

from PyQt6 import sip
from PyQt6.QtCore import QObject, QThread, pyqtSignal

from undo_history.constants import DEFAULT_HISTORY_SIZE
from undo_history.core.actions import Undoable
from undo_history.core.history import History, HistoryState


def _owner_thread_only(method):
    """Decorator: raise RuntimeError when called off the owning thread."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if QThread.currentThread() != self.thread():
            raise RuntimeError(
                f"{self.__class__.__name__}.{method.__name__} called from a "
                "thread that does not own the object"
            )
        return method(self, *args, **kwargs)
    return wrapper


def _forwarding_listener(adapter: QtHistory):
    """History listener that holds the adapter weakly.

    Skips delivery once the adapter is collected or its C++ side deleted.
    """
    ref = weakref.ref(adapter)

    def listener(state: HistoryState) -> None:
        target = ref()
        if target is None or sip.isdeleted(target):
            return
        target._on_history_changed(state)

    return listener


class QtHistory(QObject):
    """History adapter emitting Qt signals on every state change.

    The per-property signals fire only when that value changed;
    ``state_changed`` fires after every effective mutation.
    """

    state_changed = pyqtSignal(object)  # HistoryState
    can_undo_changed = pyqtSignal(bool)
    can_redo_changed = pyqtSignal(bool)
    undo_action_name_changed = pyqtSignal(str)
    redo_action_name_changed = pyqtSignal(str)

    def __init__(
        self,
        size: int = DEFAULT_HISTORY_SIZE,
        parent: QObject | None = None,
        history: History | None = None,
    ):
        super().__init__(parent)
        self._history = history if history is not None else History(size)
        self._last_state = self._history.state()
        self._listener = _forwarding_listener(self)
        self._history.add_listener(self._listener)
        # must not capture self: runs while the C++ object is being destroyed
        wrapped, listener = self._history, self._listener
        self.destroyed.connect(lambda *_args: wrapped.remove_listener(listener))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def history(self) -> History:
        """Wrapped core history."""
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def undo_action(self) -> Undoable | None:
        return self._history.undo_action

    @property
    def redo_action(self) -> Undoable | None:
        return self._history.redo_action

    @property
    def undo_action_name(self) -> str:
        return self._history.state().undo_action_name

    @property
    def redo_action_name(self) -> str:
        return self._history.state().redo_action_name

    @property
    def undo_stack_count(self) -> int:
        return self._history.undo_stack_count

    @property
    def redo_stack_count(self) -> int:
        return self._history.redo_stack_count

    @property
    def size(self) -> int:
        return self._history.size

    @size.setter
    def size(self, value: int) -> None:
        self.set_size(value)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    @_owner_thread_only
    def set_size(self, value: int) -> None:
        self._history.set_size(value)

    @_owner_thread_only
    def record_action(self, action: Undoable) -> None:
        self._history.record_action(action)

    @_owner_thread_only
    def execute_and_record(self, action: Undoable) -> None:
        self._history.execute_and_record(action)

    @_owner_thread_only
    def executed_last_recorded_action(self) -> bool:
        return self._history.executed_last_recorded_action()

    @_owner_thread_only
    def undo(self) -> bool:
        return self._history.undo()

    @_owner_thread_only
    def redo(self) -> bool:
        return self._history.redo()

    @_owner_thread_only
    def clear(self) -> None:
        self._history.clear()

    def detach(self) -> None:
        """Stop listening to the wrapped history."""
        self._history.remove_listener(self._listener)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _on_history_changed(self, state: HistoryState) -> None:
        previous = self._last_state
        self._last_state = state
        if state.can_undo != previous.can_undo:
            self.can_undo_changed.emit(state.can_undo)
        if state.can_redo != previous.can_redo:
            self.can_redo_changed.emit(state.can_redo)
        if state.undo_action_name != previous.undo_action_name:
            self.undo_action_name_changed.emit(state.undo_action_name)
        if state.redo_action_name != previous.redo_action_name:
            self.redo_action_name_changed.emit(state.redo_action_name)
        self.state_changed.emit(state)
