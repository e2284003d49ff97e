"""Cluster, state-scheme and solver presets."""

from dataclasses import dataclass
from typing import Final

from hex_stepper.config import (
    DEFAULT_CLUSTER_RADIUS,
    ENVELOPE_FLAT,
    ENVELOPE_GRID_DATA,
    HEX_RADIUS_PX,
    SOLVER_COMMAND,
    SOLVER_POLL_INTERVAL_SECONDS,
    SOLVER_TIMEOUT_SECONDS,
    STATE_BLACK,
    STATE_CLOSED,
    STATE_GRAY,
    STATE_OPEN,
    STATE_WHITE,
)


@dataclass(frozen=True)
class StateScheme:
    """Ordered cell states plus which of them mean open and closed.

    Clicking a cell cycles through ``states`` in order. States that are
    neither open nor closed are undetermined.
    """

    name: str
    states: tuple[str, ...]
    open_state: str
    closed_state: str
    default_state: str

    def next_state(self, state: str) -> str:
        index = self.states.index(state)
        return self.states[(index + 1) % len(self.states)]

    def is_open(self, state: str) -> bool:
        return state == self.open_state

    def is_closed(self, state: str) -> bool:
        return state == self.closed_state


@dataclass(frozen=True)
class ClusterSpec:
    """Geometry of a generated hex cluster."""

    cluster_radius: int
    hex_radius_px: float


@dataclass(frozen=True)
class SolverSpec:
    """How the external solver process is launched and talked to."""

    command: tuple[str, ...]
    timeout_seconds: float | None
    poll_interval_seconds: float
    request_envelope: str

    def __post_init__(self):
        if not self.command:
            raise ValueError("solver command cannot be empty")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("solver timeout must be positive")
        if self.poll_interval_seconds <= 0:
            raise ValueError("solver poll interval must be positive")
        if self.request_envelope not in (ENVELOPE_GRID_DATA, ENVELOPE_FLAT):
            raise ValueError(f"unknown request envelope: {self.request_envelope!r}")


BINARY_SCHEME: Final[StateScheme] = StateScheme(
    name="binary",
    states=(STATE_OPEN, STATE_CLOSED),
    open_state=STATE_OPEN,
    closed_state=STATE_CLOSED,
    default_state=STATE_OPEN,
)

LEGACY_SCHEME: Final[StateScheme] = StateScheme(
    name="legacy",
    states=(STATE_GRAY, STATE_WHITE, STATE_BLACK),
    open_state=STATE_WHITE,
    closed_state=STATE_BLACK,
    default_state=STATE_GRAY,
)

CLUSTER_STANDARD: Final[ClusterSpec] = ClusterSpec(
    cluster_radius=DEFAULT_CLUSTER_RADIUS,
    hex_radius_px=HEX_RADIUS_PX,
)

SOLVER_STANDARD: Final[SolverSpec] = SolverSpec(
    command=SOLVER_COMMAND,
    timeout_seconds=SOLVER_TIMEOUT_SECONDS,
    poll_interval_seconds=SOLVER_POLL_INTERVAL_SECONDS,
    request_envelope=ENVELOPE_GRID_DATA,
)

__all__ = [
    "StateScheme",
    "ClusterSpec",
    "SolverSpec",
    "BINARY_SCHEME",
    "LEGACY_SCHEME",
    "CLUSTER_STANDARD",
    "SOLVER_STANDARD",
]
