"""Color constants used by Hex Stepper."""

from typing import Final

Rgb = tuple[int, int, int]

COLOR_CHARCOAL: Final[Rgb] = (45, 45, 45)
COLOR_NEAR_BLACK: Final[Rgb] = (18, 18, 18)
COLOR_SOFT_WHITE: Final[Rgb] = (236, 236, 236)
COLOR_SLATE_GRAY: Final[Rgb] = (120, 120, 120)
COLOR_AMBER: Final[Rgb] = (240, 180, 60)
COLOR_AQUA: Final[Rgb] = (50, 215, 200)
COLOR_CORAL: Final[Rgb] = (240, 95, 95)
COLOR_SAND: Final[Rgb] = (214, 196, 150)
COLOR_ICE_BLUE: Final[Rgb] = (170, 215, 245)
COLOR_DEEP_INDIGO: Final[Rgb] = (60, 40, 150)

COLOR_START: Final[Rgb] = COLOR_AQUA
COLOR_END: Final[Rgb] = COLOR_CORAL
COLOR_BLOCKED: Final[Rgb] = COLOR_NEAR_BLACK
COLOR_UNDETERMINED: Final[Rgb] = COLOR_SLATE_GRAY
COLOR_WEIGHTED: Final[Rgb] = COLOR_SAND
COLOR_OPEN: Final[Rgb] = COLOR_SOFT_WHITE
COLOR_GRADIENT_NEAR: Final[Rgb] = COLOR_ICE_BLUE
COLOR_GRADIENT_FAR: Final[Rgb] = COLOR_DEEP_INDIGO
COLOR_GRID_LINE: Final[Rgb] = COLOR_CHARCOAL
COLOR_SELECTION: Final[Rgb] = COLOR_AMBER
COLOR_LABEL: Final[Rgb] = COLOR_CHARCOAL
COLOR_ERROR: Final[Rgb] = COLOR_CORAL
