"""Pretty-printed JSON export of a grid."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from hex_stepper.config import EXPORT_INDENT
from hex_stepper.protocol import NodeSnapshot

logger = logging.getLogger(__name__)


def export_grid_json(grid) -> str:
    """Return the grid as ``{"nodes": [...]}`` with neighbour ids filled in."""

    grid.cache_neighbors()
    payload = {"nodes": [NodeSnapshot.from_cell(cell).to_payload() for cell in grid.cells]}
    return json.dumps(payload, indent=EXPORT_INDENT)


def write_grid_export(grid, path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(export_grid_json(grid) + "\n", encoding="utf-8")
    logger.info("Exported %d cells to %s", len(grid), target)
    return target


__all__ = ["export_grid_json", "write_grid_export"]
