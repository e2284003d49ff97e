"""Cell fill colors, including the distance gradient."""

from __future__ import annotations

from hex_stepper.visual.theme import (
    COLOR_BLOCKED,
    COLOR_END,
    COLOR_GRADIENT_FAR,
    COLOR_GRADIENT_NEAR,
    COLOR_OPEN,
    COLOR_START,
    COLOR_UNDETERMINED,
    COLOR_WEIGHTED,
    Rgb,
)


def lerp_color(a: Rgb, b: Rgb, t: float) -> Rgb:
    """Linear blend between two colors, ``t`` clamped to [0, 1]."""

    t = max(0.0, min(1.0, float(t)))
    return tuple(int(round(ca + (cb - ca) * t)) for ca, cb in zip(a, b))


def distance_ratio(distance: float, max_cost: float) -> float:
    if max_cost is None or max_cost <= 0:
        max_cost = 1
    return max(0.0, min(1.0, distance / max_cost))


def cell_fill_color(cell, selection, max_cost: float, scheme) -> Rgb:
    if cell.id == selection.start_id:
        return COLOR_START
    if cell.id == selection.end_id:
        return COLOR_END
    if scheme.is_closed(cell.state):
        return COLOR_BLOCKED
    if not scheme.is_open(cell.state):
        return COLOR_UNDETERMINED

    if cell.visited and cell.distance > 0:
        return lerp_color(COLOR_GRADIENT_NEAR, COLOR_GRADIENT_FAR, distance_ratio(cell.distance, max_cost))
    if cell.cost > 0:
        return COLOR_WEIGHTED
    return COLOR_OPEN


__all__ = ["lerp_color", "distance_ratio", "cell_fill_color"]
