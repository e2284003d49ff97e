"""Request and response records exchanged with the solver process.

A request is a snapshot of every cell plus the start and end ids. It is
built on the thread that owns the grid and is immutable afterwards, so it
can be handed to a worker without sharing grid state.

A response is validated in full before anything is merged: either every
node entry is well formed or the whole response is rejected with
:class:`ProtocolError`.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass

from hex_stepper.config import ENVELOPE_FLAT, ENVELOPE_GRID_DATA
from hex_stepper.errors import ProtocolError


@dataclass(frozen=True)
class NodeSnapshot:
    id: int
    state: str
    q: int
    r: int
    s: int
    x: float
    y: float
    cost: float
    distance: float
    visited: bool
    neighbors: tuple[int, ...] = ()

    @classmethod
    def from_cell(cls, cell) -> "NodeSnapshot":
        return cls(
            id=cell.id,
            state=cell.state,
            q=cell.q,
            r=cell.r,
            s=cell.s,
            x=cell.x,
            y=cell.y,
            cost=cell.cost or 0,
            distance=cell.distance or 0,
            visited=bool(cell.visited),
            neighbors=tuple(cell.neighbors or ()),
        )

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "state": self.state,
            "q": self.q,
            "r": self.r,
            "s": self.s,
            "x": self.x,
            "y": self.y,
            "cost": self.cost,
            "distance": self.distance,
            "visited": self.visited,
            "neighbors": list(self.neighbors),
        }


@dataclass(frozen=True)
class StepRequest:
    nodes: tuple[NodeSnapshot, ...]
    start_id: int
    end_id: int

    def nodes_payload(self) -> dict[str, object]:
        return {"nodes": [node.to_payload() for node in self.nodes]}

    def to_payload(self, envelope: str = ENVELOPE_GRID_DATA) -> dict[str, object]:
        if envelope == ENVELOPE_GRID_DATA:
            return {
                "gridData": self.nodes_payload(),
                "startId": self.start_id,
                "endId": self.end_id,
            }
        if envelope == ENVELOPE_FLAT:
            payload = self.nodes_payload()
            payload["startId"] = self.start_id
            payload["endId"] = self.end_id
            return payload
        raise ValueError(f"unknown request envelope: {envelope!r}")


@dataclass(frozen=True)
class NodeUpdate:
    """One node of a solver response. ``None`` means the field was absent."""

    id: int
    distance: float | None = None
    cost: float | None = None
    visited: bool | None = None


@dataclass(frozen=True)
class StepResult:
    nodes: tuple[NodeUpdate, ...]

    def by_id(self) -> dict[int, NodeUpdate]:
        """Index updates by id; the first entry wins when ids repeat."""

        index: dict[int, NodeUpdate] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index


def build_step_request(grid, start_id: int, end_id: int) -> StepRequest:
    for label, cell_id in (("start", start_id), ("end", end_id)):
        if not grid.has_cell(cell_id):
            raise ValueError(f"{label} id {cell_id!r} is not a cell of this grid")
    nodes = tuple(NodeSnapshot.from_cell(cell) for cell in grid.cells)
    return StepRequest(nodes=nodes, start_id=start_id, end_id=end_id)


def encode_request(request: StepRequest, envelope: str = ENVELOPE_GRID_DATA) -> str:
    """Serialize a request as a single newline-terminated JSON line."""

    return json.dumps(request.to_payload(envelope), separators=(",", ":")) + "\n"


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _optional_non_negative(entry, key, index):
    if key not in entry or entry[key] is None:
        return None
    value = entry[key]
    if not _is_number(value):
        raise ProtocolError(f"node #{index}: {key!r} must be a number, got {value!r}")
    if value < 0:
        raise ProtocolError(f"node #{index}: {key!r} cannot be negative, got {value!r}")
    return value


def _parse_node(entry, index) -> NodeUpdate:
    if not isinstance(entry, dict):
        raise ProtocolError(f"node #{index} is not an object")

    node_id = entry.get("id")
    if isinstance(node_id, bool) or not isinstance(node_id, int):
        raise ProtocolError(f"node #{index}: 'id' must be an integer, got {node_id!r}")

    visited = entry.get("visited")
    if visited is not None and not isinstance(visited, bool):
        raise ProtocolError(f"node #{index}: 'visited' must be a boolean, got {visited!r}")

    return NodeUpdate(
        id=node_id,
        distance=_optional_non_negative(entry, "distance", index),
        cost=_optional_non_negative(entry, "cost", index),
        visited=visited,
    )


def parse_step_response(text: str) -> StepResult:
    """Decode and validate solver output."""

    if not text or not text.strip():
        raise ProtocolError("solver produced no output")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"solver output is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ProtocolError("solver output must be a JSON object")

    nodes = payload.get("nodes")
    if not isinstance(nodes, list):
        raise ProtocolError("solver output must contain a 'nodes' list")

    return StepResult(nodes=tuple(_parse_node(entry, index) for index, entry in enumerate(nodes)))


__all__ = [
    "NodeSnapshot",
    "StepRequest",
    "NodeUpdate",
    "StepResult",
    "build_step_request",
    "encode_request",
    "parse_step_response",
]
