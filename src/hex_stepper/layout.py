"""Layout helpers for flat-topped axial hex clusters."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Order matters: neighbour lists are reported in this order.
AXIAL_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
)


@dataclass(frozen=True)
class ClusterView:
    """Screen transform that fits a cluster into the playable area."""

    scale: float
    origin_x_px: float
    origin_y_px: float

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Map cluster pixel coordinates to top-left screen coordinates."""

        return self.origin_x_px + x * self.scale, self.origin_y_px + y * self.scale


def coord_key(q: int, r: int) -> str:
    """Return the ``"q,r"`` lookup key for an axial coordinate."""

    return f"{q},{r}"


def axial_to_pixel_flat(q: int, r: int, radius_px: float) -> tuple[float, float]:
    """Map axial coordinates to the center of a flat-topped hex."""

    x = 1.5 * radius_px * q
    y = math.sqrt(3) * radius_px * (r + q / 2)
    return x, y


def neighbor_coords_axial(q: int, r: int) -> list[tuple[int, int]]:
    """Return six axial neighbor coordinates without bounds filtering."""

    return [(q + dq, r + dr) for dq, dr in AXIAL_DIRECTIONS]


def centered_hex_count(radius: int) -> int:
    """Number of cells in a hexagonal cluster of the given radius."""

    radius = int(radius)
    if radius < 0:
        raise ValueError("cluster radius cannot be negative")
    return 3 * radius * radius + 3 * radius + 1


def hex_corner_points(x: float, y: float, radius_px: float) -> tuple[tuple[float, float], ...]:
    """Corners of a flat-topped hex centred on ``(x, y)``."""

    return tuple(
        (x + radius_px * math.cos(math.radians(60 * i)), y + radius_px * math.sin(math.radians(60 * i)))
        for i in range(6)
    )


def compute_cluster_view(
    cluster_radius: int,
    hex_radius_px: float,
    screen_width_px: int,
    screen_height_px: int,
    bottom_bar_height_px: int,
    margin_px: int = 0,
) -> ClusterView:
    """Compute a scale and origin that fit the whole cluster on screen."""

    available_width = int(screen_width_px) - 2 * int(margin_px)
    available_height = int(screen_height_px) - int(bottom_bar_height_px) - 2 * int(margin_px)
    if available_width < 1 or available_height < 1:
        raise ValueError("screen dimensions must leave positive playable area")

    cluster_radius = max(0, int(cluster_radius))
    cluster_width = hex_radius_px * (3.0 * cluster_radius + 2.0)
    cluster_height = math.sqrt(3) * hex_radius_px * (2.0 * cluster_radius + 1.0)
    scale = min(available_width / cluster_width, available_height / cluster_height)

    origin_x = int(screen_width_px) / 2.0
    origin_y = (int(screen_height_px) - int(bottom_bar_height_px)) / 2.0
    return ClusterView(scale=scale, origin_x_px=origin_x, origin_y_px=origin_y)


def point_in_polygon(point, polygon) -> bool:
    x, y = point
    inside = False
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        if ((y1 > y) != (y2 > y)) and (x < (x2 - x1) * (y - y1) / (y2 - y1) + x1):
            inside = not inside
    return inside


__all__ = [
    "AXIAL_DIRECTIONS",
    "ClusterView",
    "coord_key",
    "axial_to_pixel_flat",
    "neighbor_coords_axial",
    "centered_hex_count",
    "hex_corner_points",
    "compute_cluster_view",
    "point_in_polygon",
]
