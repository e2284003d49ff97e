"""Runtime helpers for Hex Stepper.

The arcade window wrapper lives in :mod:`hex_stepper.runtime.arcade_runtime`
and is imported by the viewer only, so the core stays importable headless.
"""

from .helpers import configure_logging

__all__ = ["configure_logging"]
