import logging

from hex_stepper.config import HEX_RADIUS_PX
from hex_stepper.layout import axial_to_pixel_flat, centered_hex_count, coord_key, neighbor_coords_axial
from hex_stepper.specs import BINARY_SCHEME

logger = logging.getLogger(__name__)


class HexCell:
    def __init__(self, cell_id, q, r, x, y, state):
        self._id = cell_id
        self._q = q
        self._r = r
        # Pixel projection is cached at generation time and never recomputed.
        self._x = x
        self._y = y
        self.state = state
        self.cost = 0
        self.distance = 0
        self.visited = False
        self.neighbors = []

    @property
    def id(self):
        return self._id

    @property
    def q(self):
        return self._q

    @property
    def r(self):
        return self._r

    @property
    def s(self):
        return -self._q - self._r

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    def reset_annotations(self):
        self.cost = 0
        self.distance = 0
        self.visited = False

    def __repr__(self):
        return f"HexCell(id={self._id}, q={self._q}, r={self._r}, state={self.state!r})"


class HexGrid:
    def __init__(self, radius, hex_radius=HEX_RADIUS_PX, scheme=BINARY_SCHEME):
        radius = int(radius)
        if radius < 0:
            raise ValueError("Cluster radius cannot be negative.")
        if hex_radius <= 0:
            raise ValueError("Hex radius must be positive.")

        self.radius = radius
        self.hex_radius = float(hex_radius)
        self.scheme = scheme
        # Color scaling reference; replaced by the end cell's distance once it is reached.
        self.max_cost = 1
        self.cells = self._generate_cells()
        self._id_by_coord = {}
        self._rebuild_coord_index()
        self.validate_integrity()

    def _generate_cells(self):
        cells = []
        next_id = 0
        for q in range(-self.radius, self.radius + 1):
            for r in range(-self.radius, self.radius + 1):
                s = -q - r
                if abs(s) > self.radius:
                    continue
                x, y = axial_to_pixel_flat(q, r, self.hex_radius)
                cells.append(HexCell(next_id, q, r, x, y, self.scheme.default_state))
                next_id += 1
        return cells

    def _rebuild_coord_index(self):
        self._id_by_coord = {coord_key(cell.q, cell.r): cell.id for cell in self.cells}

    def __len__(self):
        return len(self.cells)

    def get_all_cells(self):
        return list(self.cells)

    def has_cell(self, cell_id):
        if isinstance(cell_id, bool) or not isinstance(cell_id, int):
            return False
        return 0 <= cell_id < len(self.cells)

    def get_cell(self, cell_id):
        if self.has_cell(cell_id):
            return self.cells[cell_id]
        return None

    def get_cell_at(self, q, r):
        cell_id = self._id_by_coord.get(coord_key(q, r))
        if cell_id is None:
            return None
        return self.cells[cell_id]

    def id_at(self, q, r):
        return self._id_by_coord.get(coord_key(q, r))

    def get_neighbors(self, cell):
        neighbors = []
        for neighbor_q, neighbor_r in neighbor_coords_axial(cell.q, cell.r):
            neighbor = self.get_cell_at(neighbor_q, neighbor_r)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors

    def cache_neighbors(self):
        for cell in self.cells:
            cell.neighbors = [neighbor.id for neighbor in self.get_neighbors(cell)]

    def set_state(self, cell_id, state):
        cell = self.get_cell(cell_id)
        if cell is None:
            raise KeyError(f"Unknown cell id: {cell_id}")
        if state not in self.scheme.states:
            raise ValueError(f"State {state!r} is not part of the {self.scheme.name} scheme")
        cell.state = state
        return cell

    def open_cell(self, cell_id):
        return self.set_state(cell_id, self.scheme.open_state)

    def reset_annotations(self):
        for cell in self.cells:
            cell.reset_annotations()
        self.max_cost = 1

    def count_states(self):
        counts = {state: 0 for state in self.scheme.states}
        for cell in self.cells:
            counts[cell.state] = counts.get(cell.state, 0) + 1
        return counts

    def validate_integrity(self):
        expected = centered_hex_count(self.radius)
        if len(self.cells) != expected:
            raise ValueError(f"Cluster of radius {self.radius} has {len(self.cells)} cells, expected {expected}")

        for index, cell in enumerate(self.cells):
            if cell.id != index:
                raise ValueError(f"Cell id gap at index {index}: found id {cell.id}")
            if cell.q + cell.r + cell.s != 0:
                raise ValueError(f"Cube invariant broken at id {cell.id}: ({cell.q},{cell.r},{cell.s})")
            if max(abs(cell.q), abs(cell.r), abs(cell.s)) > self.radius:
                raise ValueError(f"Cell {cell.id} lies outside radius {self.radius}")
            if cell.state not in self.scheme.states:
                raise ValueError(f"Invalid state at id {cell.id}: {cell.state!r}")
            if cell.cost < 0 or cell.distance < 0:
                raise ValueError(f"Negative annotation at id {cell.id}: cost={cell.cost}, distance={cell.distance}")

        if len(self._id_by_coord) != len(self.cells):
            raise ValueError("Axial coordinate index does not match the cell set")


def generate_cluster(radius, hex_radius=HEX_RADIUS_PX, scheme=BINARY_SCHEME):
    """Build a hexagonal cluster with ids assigned in q-major, r-minor order."""

    grid = HexGrid(radius, hex_radius=hex_radius, scheme=scheme)
    logger.debug("Generated cluster radius=%d cells=%d scheme=%s", grid.radius, len(grid), scheme.name)
    return grid
