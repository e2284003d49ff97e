"""Neighbour-weighted random open/closed assignment for hex clusters."""

from __future__ import annotations

import logging
import random

from hex_stepper.config import (
    RANDOM_CROWDED_OPEN_NEIGHBORS,
    RANDOM_OPEN_CHANCE_CROWDED,
    RANDOM_OPEN_CHANCE_ISOLATED,
    RANDOM_OPEN_CHANCE_SPARSE,
)

logger = logging.getLogger(__name__)


def open_probability(open_count: int, closed_count: int) -> float:
    """Chance that a cell is drawn open given its neighbours' states."""

    if open_count == 0 and closed_count == 0:
        return RANDOM_OPEN_CHANCE_ISOLATED
    if open_count < RANDOM_CROWDED_OPEN_NEIGHBORS:
        return RANDOM_OPEN_CHANCE_SPARSE
    return RANDOM_OPEN_CHANCE_CROWDED


def count_neighbor_states(grid, cell, states_by_id) -> tuple[int, int]:
    """Count open and closed neighbours using a snapshot of states by id."""

    scheme = grid.scheme
    open_count = 0
    closed_count = 0
    for neighbor in grid.get_neighbors(cell):
        state = states_by_id[neighbor.id]
        if scheme.is_open(state):
            open_count += 1
        elif scheme.is_closed(state):
            closed_count += 1
    return open_count, closed_count


def randomize_states(grid, start_id, end_id, rng: random.Random | None = None):
    """Draw a new open/closed state for every cell.

    Neighbour counts are taken from the states the grid had before this pass,
    so the result does not depend on iteration order. Every cell's path
    annotations are cleared. The start and end cells are forced open after
    the draw.
    """

    rng = rng or random
    scheme = grid.scheme
    previous_states = [cell.state for cell in grid.cells]

    for cell in grid.cells:
        open_count, closed_count = count_neighbor_states(grid, cell, previous_states)
        chance = open_probability(open_count, closed_count)
        cell.state = scheme.open_state if rng.random() < chance else scheme.closed_state

    grid.reset_annotations()

    for forced_id in (start_id, end_id):
        if grid.has_cell(forced_id):
            grid.open_cell(forced_id)
        else:
            logger.warning("Cannot force cell %r open: not in a grid of %d cells", forced_id, len(grid))

    counts = grid.count_states()
    logger.debug(
        "Randomized %d cells: open=%d closed=%d",
        len(grid),
        counts.get(scheme.open_state, 0),
        counts.get(scheme.closed_state, 0),
    )
    return grid


__all__ = [
    "open_probability",
    "count_neighbor_states",
    "randomize_states",
]
