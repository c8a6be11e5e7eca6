"""Application-wide constants."""

APP_NAME = "Undo History"
APP_VERSION = "0.1.0"
APP_ORGANIZATION = "UndoHistory"

# History capacity
DEFAULT_HISTORY_SIZE = 25
MIN_HISTORY_SIZE = 1
MAX_HISTORY_SIZE_UI = 1000  # upper bound of the demo spin box only

# Demo window
MIN_WINDOW_WIDTH = 420
MIN_WINDOW_HEIGHT = 240
BURST_STEPS = 5

# QSettings keys
SETTINGS_HISTORY_SIZE = "history/size"
SETTINGS_WINDOW_GEOMETRY = "mainwindow/geometry"
