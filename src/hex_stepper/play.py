"""Interactive viewer: step the external solver over a hex cluster."""

from __future__ import annotations

import argparse
import logging
import random
import shlex
from dataclasses import replace

import arcade

from hex_stepper.config import (
    ENVELOPE_FLAT,
    ENVELOPE_GRID_DATA,
    EXPORT_PATH,
    FONT_NAME_BAR,
    FONT_NAME_LABELS,
    FONT_SIZE_BAR,
    FONT_SIZE_LABELS,
    FPS,
    MAX_CLUSTER_RADIUS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WINDOW_TITLE,
)
import hex_stepper.render as ui
from hex_stepper.controller import HexStepController
from hex_stepper.errors import StepInProgressError
from hex_stepper.runtime import configure_logging
from hex_stepper.runtime.arcade_runtime import ArcadeFrameClock, ArcadeWindowController
from hex_stepper.solver import SolverClient
from hex_stepper.specs import BINARY_SCHEME, CLUSTER_STANDARD, LEGACY_SCHEME, SOLVER_STANDARD

logger = logging.getLogger(__name__)

_STEP_KEYS = (arcade.key.SPACE, arcade.key.ENTER)
_GROW_KEYS = (arcade.key.PLUS, arcade.key.EQUAL, arcade.key.NUM_ADD)
_SHRINK_KEYS = (arcade.key.MINUS, arcade.key.NUM_SUBTRACT)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hex-stepper", description=__doc__)
    parser.add_argument(
        "--radius",
        type=int,
        default=CLUSTER_STANDARD.cluster_radius,
        help=f"cluster radius (0..{MAX_CLUSTER_RADIUS})",
    )
    parser.add_argument(
        "--solver",
        default=shlex.join(SOLVER_STANDARD.command),
        help="solver command line, split shell-style",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=SOLVER_STANDARD.timeout_seconds,
        help="seconds before a solver step is abandoned (0 disables)",
    )
    parser.add_argument(
        "--envelope",
        choices=(ENVELOPE_GRID_DATA, ENVELOPE_FLAT),
        default=SOLVER_STANDARD.request_envelope,
        help="request layout written to the solver",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for cluster randomization")
    parser.add_argument("--legacy-states", action="store_true", help="use the GRAY/WHITE/BLACK cell states")
    parser.add_argument("--export-path", default=EXPORT_PATH, help="where X writes the grid export")
    parser.add_argument("--log-level", default="INFO", help="logging level")
    return parser


def build_controller(args) -> HexStepController:
    timeout = args.timeout if args.timeout and args.timeout > 0 else None
    solver_spec = replace(
        SOLVER_STANDARD,
        command=tuple(shlex.split(args.solver)),
        timeout_seconds=timeout,
        request_envelope=args.envelope,
    )
    return HexStepController(
        cluster_spec=replace(CLUSTER_STANDARD, cluster_radius=args.radius),
        scheme=LEGACY_SCHEME if args.legacy_states else BINARY_SCHEME,
        client=SolverClient(solver_spec),
        rng=random.Random(args.seed),
    )


def handle_key(controller: HexStepController, symbol: int, export_path: str):
    if symbol == arcade.key.S:
        controller.enter_select_start()
    elif symbol == arcade.key.E:
        controller.enter_select_end()
    elif symbol == arcade.key.R:
        controller.randomize()
    elif symbol == arcade.key.N:
        controller.new_cluster()
    elif symbol in _GROW_KEYS:
        controller.resize_cluster(1)
    elif symbol in _SHRINK_KEYS:
        controller.resize_cluster(-1)
    elif symbol in _STEP_KEYS:
        try:
            controller.begin_step()
        except StepInProgressError:
            logger.debug("Step ignored: one is already in flight")
    elif symbol == arcade.key.X:
        try:
            controller.export_to(export_path)
        except OSError as exc:
            controller.last_error = f"Export failed: {exc}"
            logger.error("Export to %s failed: %s", export_path, exc)
    elif symbol == arcade.key.ESCAPE:
        if not controller.cancel_step():
            controller.machine.cancel()


def play(argv=None):
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)
    controller = build_controller(args)

    window_controller = ArcadeWindowController(
        SCREEN_WIDTH,
        SCREEN_HEIGHT,
        WINDOW_TITLE,
        enabled=True,
        queue_input_events=True,
        vsync=False,
    )
    window = window_controller.window
    if window is None:
        return

    frame_clock = ArcadeFrameClock()
    font_labels = ui.load_font_spec(FONT_NAME_LABELS, FONT_SIZE_LABELS)
    font_bar = ui.load_font_spec(FONT_NAME_BAR, FONT_SIZE_BAR)

    try:
        while True:
            frame_clock.tick(FPS)
            if window_controller.poll_events():
                break

            for symbol in window_controller.consume_key_presses():
                handle_key(controller, symbol, args.export_path)

            for click in window_controller.consume_mouse_presses():
                if click.button != arcade.MOUSE_BUTTON_LEFT:
                    continue
                top_left_y = window_controller.to_top_left_y(click.y)
                cell = ui.get_cell_under_pixel(controller.grid, click.x, top_left_y)
                if cell is None:
                    continue
                controller.handle_click(cell.id)

            controller.poll_step()
            ui.draw_frame(window, font_labels, font_bar, controller)
            window_controller.flip()
    finally:
        controller.close()
        window_controller.close()


if __name__ == "__main__":
    play()
