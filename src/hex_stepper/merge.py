import logging

logger = logging.getLogger(__name__)


def merge_step_result(grid, result, end_id):
    """Fold a validated step result into the grid in place.

    Only ``distance``, ``cost`` and ``visited`` are written, and only for
    cells that have an entry in the result. A field missing from an entry
    keeps its current value. When the end cell's entry carries a distance
    it becomes the grid's ``max_cost``.
    """

    updates = result.by_id()
    merged = 0
    for cell in grid.cells:
        update = updates.get(cell.id)
        if update is None:
            continue

        if update.distance is not None:
            cell.distance = update.distance
        if update.cost is not None:
            cell.cost = update.cost
        if update.visited is not None:
            cell.visited = update.visited
        merged += 1

        if cell.id == end_id and update.distance is not None:
            grid.max_cost = update.distance

    unknown = [node_id for node_id in updates if not grid.has_cell(node_id)]
    if unknown:
        logger.debug("Ignored %d response entries with unknown ids: %s", len(unknown), unknown[:10])
    logger.debug("Merged %d of %d cells, max_cost=%s", merged, len(grid), grid.max_cost)
    return grid
