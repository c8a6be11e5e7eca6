"""Undo/redo history — pending slot plus bounded undo and redo stacks.

Actions reach the undo stack in one of two ways:

- ``record_action(a)`` parks ``a`` in the pending slot without running it.
  It is committed (pushed, executed, redo cleared) by the next
  ``executed_last_recorded_action()``, or implicitly by the next
  ``record_action``/``execute_and_record``.
- ``execute_and_record(a)`` runs ``a`` at once and pushes it.

Usage::

    history = History(size=50)
    history.execute_and_record(CallbackAction(doc.bold, doc.unbold, "Bold"))
    history.undo()
    history.redo()

Thread safety: every mutator holds one non-reentrant lock for the whole
operation. Listeners registered with ``add_listener`` get one
``HistoryState`` per mutation, taken under that lock, and are called one
at a time in mutation order. Neither action hooks nor listeners may call
a mutator of the same History; such a call deadlocks. Reading state from
a listener is fine.

Errors raised by action hooks propagate unchanged and leave the history
in whatever state it had reached (e.g. an action pushed on the undo
stack but only partly executed). Listeners are still notified of that
state. Call ``clear()`` to recover.

Pure Python (no Qt dependency). ``ui.qt_history.QtHistory`` forwards the
state notifications into Qt signals.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable

from undo_history.constants import DEFAULT_HISTORY_SIZE, MIN_HISTORY_SIZE
from undo_history.core.actions import Undoable
from undo_history.core.sized_stack import SizedStack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryState:
    """Snapshot of the observable history state, sent to listeners."""

    can_undo: bool
    can_redo: bool
    undo_action: Undoable | None
    redo_action: Undoable | None
    undo_stack_count: int
    redo_stack_count: int
    size: int

    @property
    def undo_action_name(self) -> str:
        return self.undo_action.name if self.undo_action is not None else ""

    @property
    def redo_action_name(self) -> str:
        return self.redo_action.name if self.redo_action is not None else ""


HistoryListener = Callable[[HistoryState], None]


@dataclass
class _Mutation:
    changed: bool = False


def _check_action(action: object) -> None:
    if not isinstance(action, Undoable):
        raise TypeError(f"expected an action, got {type(action).__name__}")


class History:
    """Bounded undo/redo history with a single pending (recorded) action."""

    def __init__(self, size: int = DEFAULT_HISTORY_SIZE) -> None:
        self._lock = threading.Lock()
        self._notify_lock = threading.Lock()
        self._listeners: list[HistoryListener] = []
        self._pending: Undoable | None = None
        self._size = DEFAULT_HISTORY_SIZE
        self._undo_stack: SizedStack[Undoable]
        self._redo_stack: SizedStack[Undoable]
        self._resize(size)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self._undo_stack.count > 0

    @property
    def can_redo(self) -> bool:
        return self._redo_stack.count > 0

    @property
    def undo_action(self) -> Undoable | None:
        return self._undo_stack.try_peek()[1]

    @property
    def redo_action(self) -> Undoable | None:
        return self._redo_stack.try_peek()[1]

    @property
    def undo_stack_count(self) -> int:
        return self._undo_stack.count

    @property
    def redo_stack_count(self) -> int:
        return self._redo_stack.count

    @property
    def pending_action(self) -> Undoable | None:
        """Recorded action not yet executed, if any."""
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        self.set_size(value)

    def state(self) -> HistoryState:
        return HistoryState(
            can_undo=self.can_undo,
            can_redo=self.can_redo,
            undo_action=self.undo_action,
            redo_action=self.redo_action,
            undo_stack_count=self.undo_stack_count,
            redo_stack_count=self.redo_stack_count,
            size=self._size,
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: HistoryListener) -> None:
        """Register ``callback(state)``, called after each effective mutation."""
        self._listeners.append(callback)

    def remove_listener(self, callback: HistoryListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    @contextmanager
    def _mutation(self):
        """Hold the lock for one mutation, then notify listeners.

        The mutator sets ``changed`` once the stacks or the pending slot are
        about to change. The snapshot is taken before the lock is released
        and delivery is serialized, so listeners see one state per mutation
        in mutation order. Listeners are notified even when an action hook
        raised midway.
        """
        mutation = _Mutation()
        state: HistoryState | None = None
        try:
            with self._lock:
                try:
                    yield mutation
                finally:
                    if mutation.changed:
                        state = self.state()
                        self._notify_lock.acquire()
        finally:
            if state is not None:
                try:
                    for callback in list(self._listeners):
                        callback(state)
                finally:
                    self._notify_lock.release()

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_size(self, value: int) -> None:
        """Change capacity. Discards the whole undo/redo history."""
        with self._mutation() as mutation:
            self._resize(value)
            mutation.changed = True

    def record_action(self, action: Undoable) -> None:
        """Park ``action`` as pending without executing it.

        A previously pending action is committed first.
        """
        _check_action(action)
        with self._mutation() as mutation:
            mutation.changed = True
            if self._pending is not None:
                self._commit_pending()
            self._pending = action
            logger.debug("Recorded pending action %r", action)

    def execute_and_record(self, action: Undoable) -> None:
        """Execute ``action`` now and push it onto the undo stack."""
        _check_action(action)
        with self._mutation() as mutation:
            if self._pending is not None:
                mutation.changed = True
                self._commit_pending()
            action.execute()
            mutation.changed = True
            self._undo_stack.push(action)
            self._redo_stack.clear()
            logger.debug("Executed and recorded %r", action)

    def executed_last_recorded_action(self) -> bool:
        """Commit the pending action. Returns False if nothing was pending."""
        with self._mutation() as mutation:
            if self._pending is None:
                return False
            mutation.changed = True
            self._commit_pending()
        return True

    def undo(self) -> bool:
        """Unexecute the newest action and move it to the redo stack.

        Returns the action's ``unexecute()`` result, or False when there is
        nothing to undo.
        """
        with self._mutation() as mutation:
            if not self._undo_stack:
                return False
            mutation.changed = True
            action = self._undo_stack.pop()
            result = action.unexecute()
            self._redo_stack.push(action)
            logger.debug("Undid %r", action)
        return result

    def redo(self) -> bool:
        """Re-execute the newest undone action and move it back to the undo stack.

        Returns the action's ``execute()`` result, or False when there is
        nothing to redo.
        """
        with self._mutation() as mutation:
            if not self._redo_stack:
                return False
            mutation.changed = True
            action = self._redo_stack.pop()
            result = action.execute()
            self._undo_stack.push(action)
            logger.debug("Redid %r", action)
        return result

    def clear(self) -> None:
        """Drop the pending action and both stacks."""
        with self._mutation() as mutation:
            mutation.changed = True
            self._undo_stack.clear()
            self._redo_stack.clear()
            self._pending = None
            logger.debug("History cleared")

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _commit_pending(self) -> None:
        action = self._pending
        self._pending = None
        self._undo_stack.push(action)
        action.execute()
        self._redo_stack.clear()
        logger.debug("Committed pending action %r", action)

    def _resize(self, value: int) -> None:
        if value < MIN_HISTORY_SIZE:
            raise ValueError(f"size must be larger than 0, got {value}")
        self._size = value
        self._undo_stack = SizedStack(value)
        self._redo_stack = SizedStack(value)
        logger.debug("History resized to %d", value)
