"""Thin arcade window wrapper driven by an explicit frame loop."""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass

import arcade


@dataclass(frozen=True)
class MouseClick:
    x: float
    y: float
    button: int


class ArcadeWindowController:
    """Owns an arcade window and queues its input for the frame loop."""

    def __init__(self, width, height, title, enabled=True, queue_input_events=True, vsync=False):
        self.width = int(width)
        self.height = int(height)
        self.queue_input_events = bool(queue_input_events)
        self._mouse_presses: list[MouseClick] = []
        self._key_presses: list[int] = []
        self._close_requested = False
        self.window = None
        if not enabled:
            return

        self.window = arcade.Window(self.width, self.height, title, vsync=vsync)
        self.window.push_handlers(
            on_mouse_press=self._on_mouse_press,
            on_key_press=self._on_key_press,
            on_close=self._on_close,
        )

    def _on_mouse_press(self, x, y, button, modifiers):
        if self.queue_input_events:
            self._mouse_presses.append(MouseClick(float(x), float(y), int(button)))

    def _on_key_press(self, symbol, modifiers):
        if self.queue_input_events:
            self._key_presses.append(int(symbol))

    def _on_close(self):
        self._close_requested = True
        return True

    def poll_events(self) -> bool:
        """Dispatch pending window events. Returns True once the window should close."""

        if self.window is None:
            return True
        self.window.dispatch_events()
        return self._close_requested

    def consume_mouse_presses(self) -> list[MouseClick]:
        presses, self._mouse_presses = self._mouse_presses, []
        return presses

    def consume_key_presses(self) -> list[int]:
        presses, self._key_presses = self._key_presses, []
        return presses

    def to_top_left_y(self, y: float) -> float:
        return self.height - y

    def flip(self):
        if self.window is not None:
            self.window.flip()

    def close(self):
        if self.window is not None:
            self.window.close()
            self.window = None


class ArcadeFrameClock:
    """Caps the frame rate and reports elapsed seconds per frame."""

    def __init__(self):
        self._last = time.perf_counter()

    def tick(self, fps: int) -> float:
        if fps > 0:
            frame_budget = 1.0 / fps
            spent = time.perf_counter() - self._last
            if spent < frame_budget:
                time.sleep(frame_budget - spent)
        now = time.perf_counter()
        dt = now - self._last
        self._last = now
        return dt


class TextCache:
    """Reuses ``arcade.Text`` objects; building them every frame is slow."""

    def __init__(self, max_entries: int = 1024):
        self.max_entries = int(max_entries)
        self._entries: OrderedDict[tuple, arcade.Text] = OrderedDict()

    def get_text(self, text, color, font_size, font_name, anchor_x="left", anchor_y="baseline") -> arcade.Text:
        key = (text, tuple(color), int(font_size), font_name, anchor_x, anchor_y)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            return cached

        text_obj = arcade.Text(
            text,
            0,
            0,
            color,
            font_size=font_size,
            font_name=font_name,
            anchor_x=anchor_x,
            anchor_y=anchor_y,
        )
        self._entries[key] = text_obj
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return text_obj
