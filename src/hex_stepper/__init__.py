"""Step an external shortest-path solver over a hexagonal cluster."""

from .controller import HexStepController
from .grid import HexCell, HexGrid, generate_cluster

__version__ = "0.1.0"

__all__ = ["HexCell", "HexGrid", "HexStepController", "generate_cluster", "__version__"]
