"""Errors raised while stepping the external solver."""


class StepError(RuntimeError):
    """Base class for failed solver steps. The grid is never modified."""


class ProcessError(StepError):
    """The solver process could not be started."""


class ProtocolError(StepError):
    """The solver answered with output that does not match the response schema."""


class SolverTimeoutError(StepError):
    """The solver did not finish within the configured time limit."""


class StepCancelledError(StepError):
    """The step was cancelled before the solver finished."""


class StepInProgressError(StepError):
    """A step was requested while another one is still outstanding."""


__all__ = [
    "StepError",
    "ProcessError",
    "ProtocolError",
    "SolverTimeoutError",
    "StepCancelledError",
    "StepInProgressError",
]
