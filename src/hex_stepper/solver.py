"""Round trips with the external solver process."""

from __future__ import annotations

import logging
import subprocess
import threading
import time

from hex_stepper.errors import ProcessError, ProtocolError, SolverTimeoutError, StepCancelledError
from hex_stepper.protocol import StepRequest, StepResult, build_step_request, encode_request, parse_step_response
from hex_stepper.specs import SOLVER_STANDARD, SolverSpec

logger = logging.getLogger(__name__)


class CancelToken:
    """Thread-safe flag used to abandon an outstanding step."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class SolverClient:
    """Spawns one solver process per step and parses its single response."""

    def __init__(self, spec: SolverSpec = SOLVER_STANDARD):
        self.spec = spec

    def step(self, grid, start_id: int, end_id: int, cancel_token: CancelToken | None = None) -> StepResult:
        request = build_step_request(grid, start_id, end_id)
        return self.run(request, cancel_token=cancel_token)

    def run(self, request: StepRequest, cancel_token: CancelToken | None = None) -> StepResult:
        payload = encode_request(request, self.spec.request_envelope).encode("utf-8")
        command = list(self.spec.command)
        started = time.monotonic()

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            logger.error("Solver could not be started: %s (%s)", command, exc)
            raise ProcessError(f"cannot start solver {command[0]!r}: {exc}") from exc

        logger.debug("Solver pid=%s started with %d nodes", process.pid, len(request.nodes))
        stdout, stderr = self._communicate(process, payload, started, cancel_token)
        elapsed = time.monotonic() - started

        if stderr:
            # Diagnostics only; never fails the step.
            diagnostics = stderr.decode("utf-8", errors="replace").strip()
            if process.returncode != 0:
                logger.warning("Solver stderr: %s", diagnostics)
            else:
                logger.debug("Solver stderr: %s", diagnostics)
        logger.info(
            "Solver finished in %.3fs exit=%s stdout=%d bytes",
            elapsed,
            process.returncode,
            len(stdout or b""),
        )

        try:
            return parse_step_response(_decode_stdout(stdout))
        except ProtocolError as exc:
            logger.error("Rejected solver response (exit=%s): %s", process.returncode, exc)
            raise

    def _communicate(self, process, payload, started, cancel_token):
        timeout = self.spec.timeout_seconds
        deadline = None if timeout is None else started + timeout
        pending_input = payload

        while True:
            if cancel_token is not None and cancel_token.cancelled:
                self._kill(process)
                logger.info("Solver step cancelled")
                raise StepCancelledError("step cancelled")

            wait = self.spec.poll_interval_seconds
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self._kill(process)
                    logger.error("Solver exceeded %.2fs timeout", timeout)
                    raise SolverTimeoutError(f"solver did not finish within {timeout:.2f}s")
                wait = min(wait, remaining)

            try:
                return process.communicate(input=pending_input, timeout=wait)
            except subprocess.TimeoutExpired:
                # Input was already written; later calls only keep draining output.
                pending_input = None

    @staticmethod
    def _kill(process):
        process.kill()
        process.communicate()


def _decode_stdout(stdout: bytes | None) -> str:
    try:
        return (stdout or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"solver output is not valid UTF-8: {exc}") from exc


__all__ = ["CancelToken", "SolverClient"]
