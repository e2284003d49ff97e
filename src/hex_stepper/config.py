"""Shared constants for Hex Stepper."""

from typing import Final

# Window
SCREEN_WIDTH: Final[int] = 1200
SCREEN_HEIGHT: Final[int] = 800
BB_HEIGHT: Final[int] = 40
FPS: Final[int] = 60
WINDOW_TITLE: Final[str] = "Hex Stepper"

# Cluster geometry
HEX_RADIUS_PX: Final[float] = 40.0
DEFAULT_CLUSTER_RADIUS: Final[int] = 4
MAX_CLUSTER_RADIUS: Final[int] = 12
DEFAULT_START_ID: Final[int] = 0
DEFAULT_END_ID: Final[int] = 3

# Cell states as they appear on the wire
STATE_OPEN: Final[str] = "OPEN"
STATE_CLOSED: Final[str] = "CLOSED"
STATE_GRAY: Final[str] = "GRAY"
STATE_WHITE: Final[str] = "WHITE"
STATE_BLACK: Final[str] = "BLACK"

# Randomization open-probabilities
RANDOM_OPEN_CHANCE_ISOLATED: Final[float] = 0.5
RANDOM_OPEN_CHANCE_SPARSE: Final[float] = 0.6
RANDOM_OPEN_CHANCE_CROWDED: Final[float] = 0.3
RANDOM_CROWDED_OPEN_NEIGHBORS: Final[int] = 3

# Solver process
SOLVER_COMMAND: Final[tuple[str, ...]] = ("./astar",)
SOLVER_TIMEOUT_SECONDS: Final[float] = 10.0
SOLVER_POLL_INTERVAL_SECONDS: Final[float] = 0.05
ENVELOPE_GRID_DATA: Final[str] = "grid_data"
ENVELOPE_FLAT: Final[str] = "flat"

# Export
EXPORT_PATH: Final[str] = "grid_export.json"
EXPORT_INDENT: Final[int] = 2

# UI
FONT_NAME_BAR: Final[str] = "Arial"
FONT_NAME_LABELS: Final[str] = "Arial"
FONT_SIZE_BAR: Final[int] = 16
FONT_SIZE_LABELS: Final[int] = 11
UI_GRID_LINE_WIDTH_PX: Final[int] = 2
UI_MIN_LINE_WIDTH_PX: Final[int] = 1
UI_SELECTION_HIGHLIGHT_SCALE: Final[float] = 0.88
UI_SELECTED_LINE_WIDTH_EXTRA_PX: Final[int] = 1
UI_VIEW_MARGIN_PX: Final[int] = 24
UI_STATUS_SEPARATOR: Final[str] = "   /   "
