"""Arcade-based rendering for Hex Stepper."""

from __future__ import annotations

import arcade

from hex_stepper.config import (
    BB_HEIGHT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    UI_GRID_LINE_WIDTH_PX,
    UI_MIN_LINE_WIDTH_PX,
    UI_SELECTED_LINE_WIDTH_EXTRA_PX,
    UI_SELECTION_HIGHLIGHT_SCALE,
    UI_STATUS_SEPARATOR,
    UI_VIEW_MARGIN_PX,
)
from hex_stepper.layout import compute_cluster_view, hex_corner_points, point_in_polygon
from hex_stepper.runtime.arcade_runtime import TextCache
from hex_stepper.selection import SelectionMode
from hex_stepper.visual import (
    COLOR_AMBER,
    COLOR_AQUA,
    COLOR_CHARCOAL,
    COLOR_CORAL,
    COLOR_ERROR,
    COLOR_GRID_LINE,
    COLOR_LABEL,
    COLOR_NEAR_BLACK,
    COLOR_SELECTION,
    COLOR_SOFT_WHITE,
    cell_fill_color,
)

_TEXT_CACHE = TextCache(max_entries=4096)
_HEX_GEOMETRY_CACHE: dict[tuple[int, int, float], dict[int, dict[str, object]]] = {}


def load_font_spec(font_name: str, size_px: int) -> dict[str, object]:
    return {"name": font_name, "size": int(size_px)}


def draw_frame(window, font_labels, font_bar, controller):
    window.clear(COLOR_CHARCOAL)
    grid = controller.grid
    selection = controller.selection
    geometry = _get_hex_geometry(grid)
    line_width = _grid_line_width()
    selected_line_width = line_width + int(UI_SELECTED_LINE_WIDTH_EXTRA_PX)

    for cell in grid.cells:
        points_arcade = geometry[cell.id]["points_arcade"]
        fill = cell_fill_color(cell, selection, grid.max_cost, grid.scheme)
        arcade.draw_polygon_filled(points_arcade, fill)

    for cell in grid.cells:
        cell_geometry = geometry[cell.id]
        x, y = cell_geometry["center"]
        arcade.draw_polygon_outline(cell_geometry["points_arcade"], COLOR_GRID_LINE, line_width)

        if cell.id in (selection.start_id, selection.end_id):
            highlight = _scaled_hex_points(cell_geometry["points"], x, y, UI_SELECTION_HIGHLIGHT_SCALE)
            arcade.draw_polygon_outline(_to_arcade_points(highlight), COLOR_SELECTION, selected_line_width)

        _draw_text(
            _cell_label(cell),
            x,
            y,
            COLOR_LABEL,
            int(font_labels["size"]),
            str(font_labels["name"]),
        )

    draw_bottom_bar(font_bar, controller)


def draw_bottom_bar(font, controller):
    arcade.draw_lbwh_rectangle_filled(0, 0, SCREEN_WIDTH, BB_HEIGHT, COLOR_NEAR_BLACK)

    selection = controller.selection
    separator = UI_STATUS_SEPARATOR if UI_STATUS_SEPARATOR else " / "
    segments = [
        (f"Start: {selection.start_id}", COLOR_AQUA),
        (separator, COLOR_SOFT_WHITE),
        (f"End: {selection.end_id}", COLOR_CORAL),
        (separator, COLOR_SOFT_WHITE),
        (_mode_text(controller), COLOR_AMBER if selection.mode != SelectionMode.NONE else COLOR_SOFT_WHITE),
        (separator, COLOR_SOFT_WHITE),
        (f"Steps: {controller.step_count}", COLOR_SOFT_WHITE),
    ]
    if controller.last_error:
        segments.extend([(separator, COLOR_SOFT_WHITE), (controller.last_error, COLOR_ERROR)])

    _draw_centered_status_segments(
        segments=segments,
        font_name=str(font["name"]),
        font_size=int(font["size"]),
        bar_height=BB_HEIGHT,
    )


def _mode_text(controller):
    if controller.busy:
        return "Solving..."
    mode = controller.selection.mode
    if mode == SelectionMode.SELECT_START:
        return "Click a start cell"
    if mode == SelectionMode.SELECT_END:
        return "Click an end cell"
    return "S/E select  R random  N new  +/- size  Space step  X export"


def _cell_label(cell):
    return f"({cell.q},{cell.r},{cell.s})"


def _draw_centered_status_segments(segments, font_name: str, font_size: int, bar_height: int):
    if not segments:
        return

    text_objects = []
    total_width = 0.0
    for text, color in segments:
        text_obj = _TEXT_CACHE.get_text(
            text=text,
            color=color,
            font_size=font_size,
            font_name=font_name,
            anchor_x="left",
            anchor_y="center",
        )
        text_objects.append(text_obj)
        total_width += float(text_obj.content_width)

    cursor_x = (SCREEN_WIDTH - total_width) / 2.0
    center_y = bar_height / 2.0
    for text_obj in text_objects:
        text_obj.x = cursor_x
        text_obj.y = center_y
        text_obj.draw()
        cursor_x += float(text_obj.content_width)


def _draw_text(text, x, y_top, color, font_size, font_name):
    text_obj = _TEXT_CACHE.get_text(
        text=text,
        color=color,
        font_size=font_size,
        font_name=font_name,
        anchor_x="center",
        anchor_y="center",
    )
    text_obj.x = x
    text_obj.y = _to_arcade_y(y_top)
    text_obj.draw()


def get_cell_under_pixel(grid, px, py):
    geometry = _get_hex_geometry(grid)
    for cell in grid.cells:
        if point_in_polygon((px, py), geometry[cell.id]["points"]):
            return cell
    return None


def _to_arcade_y(y_top: float) -> float:
    return SCREEN_HEIGHT - y_top


def _to_arcade_points(points):
    return [(px, _to_arcade_y(py)) for px, py in points]


def _get_hex_geometry(grid):
    key = (id(grid), len(grid), grid.hex_radius)
    cached = _HEX_GEOMETRY_CACHE.get(key)
    if cached is not None:
        return cached
    if len(_HEX_GEOMETRY_CACHE) > 8:
        _HEX_GEOMETRY_CACHE.clear()

    view = compute_cluster_view(
        cluster_radius=grid.radius,
        hex_radius_px=grid.hex_radius,
        screen_width_px=SCREEN_WIDTH,
        screen_height_px=SCREEN_HEIGHT,
        bottom_bar_height_px=BB_HEIGHT,
        margin_px=UI_VIEW_MARGIN_PX,
    )
    radius = grid.hex_radius * view.scale
    geometry: dict[int, dict[str, object]] = {}
    for cell in grid.cells:
        x, y = view.to_screen(cell.x, cell.y)
        points = hex_corner_points(x, y, radius)
        geometry[cell.id] = {
            "center": (x, y),
            "points": points,
            "points_arcade": _to_arcade_points(points),
        }

    _HEX_GEOMETRY_CACHE[key] = geometry
    return geometry


def _scaled_hex_points(base_points, x, y, scale):
    return [(x + (px - x) * scale, y + (py - y) * scale) for px, py in base_points]


def _grid_line_width():
    return max(int(UI_MIN_LINE_WIDTH_PX), int(UI_GRID_LINE_WIDTH_PX))
