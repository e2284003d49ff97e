import os
import random
import sys
import textwrap
import threading
import time

import pytest

from hex_stepper.config import ENVELOPE_GRID_DATA, STATE_OPEN
from hex_stepper.controller import HexStepController
from hex_stepper.errors import ProtocolError, StepCancelledError, StepInProgressError
from hex_stepper.protocol import NodeUpdate, StepResult
from hex_stepper.selection import SelectionMode, SelectionState
from hex_stepper.solver import SolverClient
from hex_stepper.specs import ClusterSpec, SolverSpec

RADIUS_ONE = ClusterSpec(cluster_radius=1, hex_radius_px=40)
END_REACHED = StepResult(nodes=(NodeUpdate(id=3, distance=5, cost=1, visited=True),))


class FakeClient:
    def __init__(self, result=None, error=None, gate=None):
        self.result = result
        self.error = error
        self.gate = gate
        self.requests = []

    def run(self, request, cancel_token=None):
        self.requests.append(request)
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return self.result


def _controller(client, seed=3):
    return HexStepController(
        cluster_spec=RADIUS_ONE,
        client=client,
        selection=SelectionState(start_id=0, end_id=3),
        rng=random.Random(seed),
    )


def _snapshot(grid):
    return [(c.id, c.state, c.cost, c.distance, c.visited) for c in grid.cells]


def test_end_to_end_step_updates_end_cell_only():
    controller = _controller(FakeClient(result=END_REACHED))
    grid = controller.grid
    assert [cell.id for cell in grid.cells] == list(range(7))
    assert grid.get_cell(0).state == STATE_OPEN
    assert grid.get_cell(3).state == STATE_OPEN

    before = _snapshot(grid)
    controller.step()

    end = grid.get_cell(3)
    assert (end.distance, end.cost, end.visited) == (5, 1, True)
    assert grid.max_cost == 5
    after = _snapshot(grid)
    assert after[:3] + after[4:] == before[:3] + before[4:]
    assert controller.step_count == 1


def test_end_to_end_with_real_process(tmp_path):
    script = tmp_path / "solver.py"
    script.write_text(
        textwrap.dedent(
            """
            import json, sys
            request = json.loads(sys.stdin.read())
            nodes = request["gridData"]["nodes"]
            assert len(nodes) == 7
            print(json.dumps({"nodes": [{"id": request["endId"], "distance": 5, "cost": 1, "visited": True}]}))
            """
        ),
        encoding="utf-8",
    )
    client = SolverClient(
        SolverSpec(
            command=(sys.executable, str(script)),
            timeout_seconds=10.0,
            poll_interval_seconds=0.02,
            request_envelope=ENVELOPE_GRID_DATA,
        )
    )
    controller = _controller(client)
    controller.step()
    assert controller.grid.get_cell(3).distance == 5
    assert controller.grid.max_cost == 5


def test_failed_step_leaves_grid_unchanged():
    controller = _controller(FakeClient(error=ProtocolError("bad output")))
    before = _snapshot(controller.grid)
    with pytest.raises(ProtocolError):
        controller.step()
    assert _snapshot(controller.grid) == before
    assert controller.grid.max_cost == 1
    assert "ProtocolError" in controller.last_error
    assert controller.step_count == 0


def test_request_uses_current_selection():
    client = FakeClient(result=StepResult(nodes=()))
    controller = _controller(client)
    controller.enter_select_end()
    controller.handle_click(6)
    controller.step()
    assert (client.requests[0].start_id, client.requests[0].end_id) == (0, 6)


def test_background_step_merges_on_poll():
    gate = threading.Event()
    controller = _controller(FakeClient(result=END_REACHED, gate=gate))
    future = controller.begin_step()
    assert controller.busy
    assert controller.poll_step() is False

    gate.set()
    future.result(timeout=5)
    assert controller.grid.get_cell(3).distance == 0
    assert controller.poll_step() is True
    assert not controller.busy
    assert controller.grid.get_cell(3).distance == 5
    controller.close()


def test_second_step_rejected_while_in_flight():
    gate = threading.Event()
    controller = _controller(FakeClient(result=END_REACHED, gate=gate))
    controller.begin_step()
    with pytest.raises(StepInProgressError):
        controller.begin_step()
    with pytest.raises(StepInProgressError):
        controller.step()
    assert controller.randomize() is False
    assert controller.new_cluster(2) is False
    assert controller.handle_click(4) is False
    gate.set()
    controller.close()


def test_background_failure_is_recorded():
    controller = _controller(FakeClient(error=ProtocolError("bad")))
    future = controller.begin_step()
    with pytest.raises(ProtocolError):
        future.result(timeout=5)
    assert controller.poll_step() is True
    assert controller.last_error.startswith("ProtocolError")
    assert not controller.busy
    controller.close()


def test_new_cluster_revalidates_selection():
    controller = HexStepController(
        cluster_spec=ClusterSpec(cluster_radius=3, hex_radius_px=40),
        client=FakeClient(result=StepResult(nodes=())),
        selection=SelectionState(start_id=30, end_id=36),
        rng=random.Random(1),
    )
    controller.new_cluster(1)
    assert len(controller.grid) == 7
    assert (controller.selection.start_id, controller.selection.end_id) == (6, 6)
    assert controller.grid.get_cell(6).state == STATE_OPEN


def test_new_cluster_cancels_pending_selection_mode():
    controller = _controller(FakeClient())
    controller.enter_select_start()
    controller.new_cluster()
    assert controller.selection.mode == SelectionMode.NONE


def test_resize_cluster_bounds():
    controller = _controller(FakeClient())
    assert controller.resize_cluster(1)
    assert len(controller.grid) == 19
    controller.new_cluster(0)
    assert controller.resize_cluster(-1) is False


def test_randomize_resets_step_annotations():
    controller = _controller(FakeClient(result=END_REACHED))
    controller.step()
    controller.randomize()
    assert controller.grid.get_cell(3).distance == 0
    assert controller.grid.max_cost == 1
    assert controller.step_count == 0
    assert controller.grid.get_cell(0).state == STATE_OPEN


def test_cancel_in_flight_step_kills_solver_and_keeps_grid(tmp_path):
    pid_file = tmp_path / "solver.pid"
    script = tmp_path / "solver.py"
    script.write_text(
        textwrap.dedent(
            f"""
            import os, time
            with open({str(pid_file)!r} + ".tmp", "w", encoding="utf-8") as handle:
                handle.write(str(os.getpid()))
            os.replace({str(pid_file)!r} + ".tmp", {str(pid_file)!r})
            time.sleep(30)
            """
        ),
        encoding="utf-8",
    )
    client = SolverClient(
        SolverSpec(
            command=(sys.executable, str(script)),
            timeout_seconds=None,
            poll_interval_seconds=0.02,
            request_envelope=ENVELOPE_GRID_DATA,
        )
    )
    controller = _controller(client)
    before = _snapshot(controller.grid)

    future = controller.begin_step()
    deadline = time.monotonic() + 5.0
    while not pid_file.exists():
        assert time.monotonic() < deadline, "solver never started"
        time.sleep(0.02)

    assert controller.cancel_step() is True
    with pytest.raises(StepCancelledError):
        future.result(timeout=5)

    assert controller.poll_step() is True
    assert controller.last_error.startswith("StepCancelledError")
    assert not controller.busy
    assert _snapshot(controller.grid) == before
    assert controller.step_count == 0
    if sys.platform != "win32":
        with pytest.raises(ProcessLookupError):
            os.kill(int(pid_file.read_text(encoding="utf-8")), 0)
    controller.close()
