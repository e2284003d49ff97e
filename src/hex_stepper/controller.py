import logging
import random
from concurrent.futures import ThreadPoolExecutor

from hex_stepper.config import MAX_CLUSTER_RADIUS
from hex_stepper.errors import StepError, StepInProgressError
from hex_stepper.export import export_grid_json, write_grid_export
from hex_stepper.generation import randomize_states
from hex_stepper.grid import generate_cluster
from hex_stepper.merge import merge_step_result
from hex_stepper.protocol import build_step_request
from hex_stepper.selection import SelectionState, SelectionStateMachine
from hex_stepper.solver import CancelToken, SolverClient
from hex_stepper.specs import BINARY_SCHEME, CLUSTER_STANDARD

logger = logging.getLogger(__name__)


class HexStepController:
    """Owns the grid, the selection and the single outstanding solver step.

    Every grid mutation happens on the caller's thread. A background step
    only carries an immutable request snapshot to the worker and brings a
    parsed result back; merging happens in :meth:`poll_step`.
    """

    def __init__(
        self,
        cluster_spec=CLUSTER_STANDARD,
        scheme=BINARY_SCHEME,
        client=None,
        selection=None,
        rng=None,
    ):
        self.cluster_spec = cluster_spec
        self.cluster_radius = int(cluster_spec.cluster_radius)
        self.scheme = scheme
        self.client = client if client is not None else SolverClient()
        self.machine = SelectionStateMachine(selection if selection is not None else SelectionState())
        self.rng = rng or random.Random()

        self.grid = None
        self.step_count = 0
        self.last_error = None
        self.last_result = None

        self._executor = None
        self._pending = None
        self._pending_request = None
        self._cancel_token = None

        self.new_cluster(self.cluster_radius)

    @property
    def selection(self):
        return self.machine.selection

    @property
    def busy(self):
        return self._pending is not None

    def new_cluster(self, radius=None):
        if self.busy:
            return False
        if radius is not None:
            radius = int(radius)
            if radius < 0 or radius > MAX_CLUSTER_RADIUS:
                raise ValueError(f"cluster radius must be within 0..{MAX_CLUSTER_RADIUS}")
            self.cluster_radius = radius

        self.grid = generate_cluster(
            self.cluster_radius,
            hex_radius=self.cluster_spec.hex_radius_px,
            scheme=self.scheme,
        )
        self.machine.revalidate(self.grid)
        self.machine.cancel()
        self._randomize_grid()
        logger.info("New cluster radius=%d cells=%d", self.cluster_radius, len(self.grid))
        return True

    def resize_cluster(self, delta):
        radius = max(0, min(MAX_CLUSTER_RADIUS, self.cluster_radius + int(delta)))
        if radius == self.cluster_radius:
            return False
        return self.new_cluster(radius)

    def randomize(self):
        if self.busy:
            return False
        self._randomize_grid()
        return True

    def _randomize_grid(self):
        randomize_states(self.grid, self.selection.start_id, self.selection.end_id, rng=self.rng)
        self.step_count = 0
        self.last_error = None
        self.last_result = None

    def enter_select_start(self):
        self.machine.enter_select_start()

    def enter_select_end(self):
        self.machine.enter_select_end()

    def handle_click(self, cell_id):
        if self.busy:
            return False
        return self.machine.handle_click(self.grid, cell_id)

    def step(self, cancel_token=None):
        """Run one solver round trip on this thread and merge the result."""

        if self.busy:
            raise StepInProgressError("a step is already in flight")

        request = build_step_request(self.grid, self.selection.start_id, self.selection.end_id)
        try:
            result = self.client.run(request, cancel_token=cancel_token)
        except StepError as exc:
            self._record_failure(exc)
            raise
        self._apply_result(request, result)
        return result

    def begin_step(self):
        """Start a step on the worker thread. Poll with :meth:`poll_step`."""

        if self.busy:
            raise StepInProgressError("a step is already in flight")

        request = build_step_request(self.grid, self.selection.start_id, self.selection.end_id)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hex-solver")
        self._cancel_token = CancelToken()
        self._pending_request = request
        self._pending = self._executor.submit(self.client.run, request, self._cancel_token)
        logger.debug("Step %d submitted", self.step_count + 1)
        return self._pending

    def poll_step(self):
        """Merge a finished background step. Returns True when one completed."""

        if self._pending is None or not self._pending.done():
            return False

        future = self._pending
        request = self._pending_request
        self._pending = None
        self._pending_request = None
        self._cancel_token = None

        try:
            result = future.result()
        except StepError as exc:
            self._record_failure(exc)
            return True
        self._apply_result(request, result)
        return True

    def cancel_step(self):
        if self._cancel_token is None:
            return False
        self._cancel_token.cancel()
        return True

    def _apply_result(self, request, result):
        merge_step_result(self.grid, result, request.end_id)
        self.step_count += 1
        self.last_result = result
        self.last_error = None

    def _record_failure(self, exc):
        self.last_error = f"{type(exc).__name__}: {exc}"
        logger.warning("Step failed, grid left unchanged: %s", self.last_error)

    def export_json(self):
        return export_grid_json(self.grid)

    def export_to(self, path):
        return write_grid_export(self.grid, path)

    def close(self):
        self.cancel_step()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
