import logging
from dataclasses import dataclass
from enum import Enum

from hex_stepper.config import DEFAULT_END_ID, DEFAULT_START_ID

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    NONE = "none"
    SELECT_START = "select_start"
    SELECT_END = "select_end"


@dataclass
class SelectionState:
    start_id: int = DEFAULT_START_ID
    end_id: int = DEFAULT_END_ID
    mode: SelectionMode = SelectionMode.NONE


class SelectionStateMachine:
    def __init__(self, selection=None):
        self.selection = selection if selection is not None else SelectionState()

    @property
    def mode(self):
        return self.selection.mode

    def enter(self, mode):
        """Arm the next click. Does not itself consume a click."""

        self.selection.mode = SelectionMode(mode)

    def enter_select_start(self):
        self.enter(SelectionMode.SELECT_START)

    def enter_select_end(self):
        self.enter(SelectionMode.SELECT_END)

    def cancel(self):
        self.selection.mode = SelectionMode.NONE

    def handle_click(self, grid, cell_id):
        cell = grid.get_cell(cell_id)
        if cell is None:
            return False

        mode = self.selection.mode
        if mode == SelectionMode.SELECT_START:
            self.selection.start_id = cell.id
            grid.open_cell(cell.id)
            self.selection.mode = SelectionMode.NONE
            logger.debug("Start set to %d", cell.id)
            return True

        if mode == SelectionMode.SELECT_END:
            self.selection.end_id = cell.id
            grid.open_cell(cell.id)
            self.selection.mode = SelectionMode.NONE
            logger.debug("End set to %d", cell.id)
            return True

        grid.set_state(cell.id, grid.scheme.next_state(cell.state))
        return True

    def revalidate(self, grid):
        """Clamp start/end ids into a freshly built grid."""

        last_id = len(grid) - 1
        start_id = min(max(0, int(self.selection.start_id)), last_id)
        end_id = min(max(0, int(self.selection.end_id)), last_id)
        if (start_id, end_id) != (self.selection.start_id, self.selection.end_id):
            logger.info(
                "Clamped selection start %s->%d end %s->%d for %d cells",
                self.selection.start_id,
                start_id,
                self.selection.end_id,
                end_id,
                len(grid),
            )
        self.selection.start_id = start_id
        self.selection.end_id = end_id
        return self.selection
