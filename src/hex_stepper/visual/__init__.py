"""Colors and cell color mapping."""

from .palette import cell_fill_color, distance_ratio, lerp_color
from .theme import (
    COLOR_AMBER,
    COLOR_AQUA,
    COLOR_BLOCKED,
    COLOR_CHARCOAL,
    COLOR_CORAL,
    COLOR_END,
    COLOR_ERROR,
    COLOR_GRADIENT_FAR,
    COLOR_GRADIENT_NEAR,
    COLOR_GRID_LINE,
    COLOR_LABEL,
    COLOR_NEAR_BLACK,
    COLOR_OPEN,
    COLOR_SELECTION,
    COLOR_SOFT_WHITE,
    COLOR_START,
    COLOR_UNDETERMINED,
    COLOR_WEIGHTED,
)

__all__ = [
    "cell_fill_color",
    "distance_ratio",
    "lerp_color",
    "COLOR_AMBER",
    "COLOR_AQUA",
    "COLOR_BLOCKED",
    "COLOR_CHARCOAL",
    "COLOR_CORAL",
    "COLOR_END",
    "COLOR_ERROR",
    "COLOR_GRADIENT_FAR",
    "COLOR_GRADIENT_NEAR",
    "COLOR_GRID_LINE",
    "COLOR_LABEL",
    "COLOR_NEAR_BLACK",
    "COLOR_OPEN",
    "COLOR_SELECTION",
    "COLOR_SOFT_WHITE",
    "COLOR_START",
    "COLOR_UNDETERMINED",
    "COLOR_WEIGHTED",
]
