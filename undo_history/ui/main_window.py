"""Main window — small counter editor driving a QtHistory.

Layout:
  Menu:    Edit (Undo / Redo / Clear History)
  Center:  counter value, edit buttons, history size spin box
  Footer:  QStatusBar with undo/redo stack counts

Every edit is a CallbackAction on the counter. "Burst" groups several
increments into one MultiAction, "Double" is recorded as pending and only
runs on "Apply" (or when the next edit commits it).
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QPushButton, QSpinBox,
    QVBoxLayout, QWidget,
)

from undo_history.constants import (
    APP_NAME, APP_VERSION, BURST_STEPS, DEFAULT_HISTORY_SIZE,
    MAX_HISTORY_SIZE_UI, MIN_HISTORY_SIZE, MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH, SETTINGS_HISTORY_SIZE, SETTINGS_WINDOW_GEOMETRY,
)
from undo_history.core.actions import CallbackAction, MultiAction
from undo_history.core.history import HistoryState
from undo_history.ui.qt_history import QtHistory

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Counter editor with undo/redo."""

    def __init__(self, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self._settings = settings if settings is not None else QSettings()
        self._value = 0
        self._history = QtHistory(self._load_history_size(), parent=self)

        self._build_actions()
        self._build_menu()
        self._build_central()
        self._connect_signals()
        self._restore_state()
        self._refresh()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def value(self) -> int:
        return self._value

    @property
    def history(self) -> QtHistory:
        return self._history

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_actions(self) -> None:
        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcut(QKeySequence.StandardKey.Redo)
        self.clear_action = QAction("Clear History", self)

    def _build_menu(self) -> None:
        edit_menu = self.menuBar().addMenu("Edit")
        edit_menu.addAction(self.undo_action)
        edit_menu.addAction(self.redo_action)
        edit_menu.addSeparator()
        edit_menu.addAction(self.clear_action)

    def _build_central(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.value_label = QLabel(central)
        layout.addWidget(self.value_label)

        buttons = QHBoxLayout()
        self.increment_button = QPushButton("+1", central)
        self.decrement_button = QPushButton("-1", central)
        self.burst_button = QPushButton(f"+{BURST_STEPS} (burst)", central)
        self.double_button = QPushButton("Double", central)
        self.apply_button = QPushButton("Apply", central)
        for button in (
            self.increment_button, self.decrement_button, self.burst_button,
            self.double_button, self.apply_button,
        ):
            buttons.addWidget(button)
        layout.addLayout(buttons)

        size_row = QHBoxLayout()
        size_row.addWidget(QLabel("History size:", central))
        self.size_spin = QSpinBox(central)
        self.size_spin.setRange(MIN_HISTORY_SIZE, MAX_HISTORY_SIZE_UI)
        self.size_spin.setValue(self._history.size)
        size_row.addWidget(self.size_spin)
        layout.addLayout(size_row)

        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        self.undo_action.triggered.connect(lambda: self._history.undo())
        self.redo_action.triggered.connect(lambda: self._history.redo())
        self.clear_action.triggered.connect(lambda: self._history.clear())
        self.increment_button.clicked.connect(lambda: self.add(1))
        self.decrement_button.clicked.connect(lambda: self.add(-1))
        self.burst_button.clicked.connect(lambda: self.burst())
        self.double_button.clicked.connect(lambda: self.record_double())
        self.apply_button.clicked.connect(
            lambda: self._history.executed_last_recorded_action()
        )
        self.size_spin.valueChanged.connect(self._on_size_changed)
        self._history.state_changed.connect(self._on_history_state)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def _set_value(self, value: int) -> None:
        self._value = value
        self.value_label.setText(str(value))

    def _make_add(self, delta: int) -> CallbackAction:
        return CallbackAction(
            lambda: self._set_value(self._value + delta),
            lambda: self._set_value(self._value - delta),
            name=f"Add {delta:+d}",
        )

    def add(self, delta: int) -> None:
        self._history.execute_and_record(self._make_add(delta))

    def burst(self) -> None:
        group = MultiAction(name=f"Burst +{BURST_STEPS}")
        for _ in range(BURST_STEPS):
            group.add_action(self._make_add(1))
        self._history.execute_and_record(group)

    def record_double(self) -> None:
        """Record a doubling edit; it runs on Apply or the next edit."""
        saved: list[int] = []

        def do() -> None:
            saved.append(self._value)
            self._set_value(self._value * 2)

        def undo() -> None:
            self._set_value(saved.pop())

        self._history.record_action(CallbackAction(do, undo, name="Double"))

    # ------------------------------------------------------------------
    # History state
    # ------------------------------------------------------------------

    def _on_history_state(self, _state: HistoryState) -> None:
        self._refresh()

    def _on_size_changed(self, size: int) -> None:
        if size == self._history.size:
            return
        self._history.set_size(size)
        self._settings.setValue(SETTINGS_HISTORY_SIZE, size)
        logger.info("History size set to %d, history discarded", size)

    def _refresh(self) -> None:
        state = self._history.history.state()
        self.value_label.setText(str(self._value))
        self.undo_action.setEnabled(state.can_undo)
        self.redo_action.setEnabled(state.can_redo)
        self.undo_action.setText(
            f"Undo {state.undo_action_name}" if state.can_undo else "Undo"
        )
        self.redo_action.setText(
            f"Redo {state.redo_action_name}" if state.can_redo else "Redo"
        )
        self.apply_button.setEnabled(self._history.history.has_pending)
        self.statusBar().showMessage(
            f"Undo: {state.undo_stack_count}  Redo: {state.redo_stack_count}"
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _load_history_size(self) -> int:
        try:
            size = int(self._settings.value(SETTINGS_HISTORY_SIZE, DEFAULT_HISTORY_SIZE))
        except (TypeError, ValueError):
            logger.warning("Invalid stored history size, using default", exc_info=True)
            return DEFAULT_HISTORY_SIZE
        if size < MIN_HISTORY_SIZE:
            logger.warning("Stored history size %d below minimum, using default", size)
            return DEFAULT_HISTORY_SIZE
        return size

    def _restore_state(self) -> None:
        geometry = self._settings.value(SETTINGS_WINDOW_GEOMETRY)
        if geometry:
            self.restoreGeometry(geometry)

    def closeEvent(self, event):
        self._settings.setValue(SETTINGS_WINDOW_GEOMETRY, self.saveGeometry())
        super().closeEvent(event)
