from hex_stepper.grid import generate_cluster
from hex_stepper.merge import merge_step_result
from hex_stepper.protocol import NodeUpdate, StepResult


def _snapshot(grid):
    return [(c.id, c.state, c.q, c.r, c.x, c.y, c.cost, c.distance, c.visited) for c in grid.cells]


def test_present_ids_update_only_path_fields():
    grid = generate_cluster(1)
    before = _snapshot(grid)
    result = StepResult(nodes=(NodeUpdate(id=2, distance=4, cost=2, visited=True),))
    merge_step_result(grid, result, end_id=3)

    cell = grid.get_cell(2)
    assert (cell.distance, cell.cost, cell.visited) == (4, 2, True)
    assert (cell.state, cell.q, cell.r, cell.x, cell.y) == before[2][1:6]
    assert _snapshot(grid)[:2] + _snapshot(grid)[3:] == before[:2] + before[3:]


def test_absent_ids_are_untouched():
    grid = generate_cluster(1)
    grid.get_cell(5).distance = 8
    grid.get_cell(5).visited = True
    merge_step_result(grid, StepResult(nodes=()), end_id=3)
    assert grid.get_cell(5).distance == 8
    assert grid.get_cell(5).visited is True


def test_missing_fields_keep_current_values():
    grid = generate_cluster(1)
    grid.get_cell(1).cost = 6
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=1, visited=True),)), end_id=3)
    cell = grid.get_cell(1)
    assert (cell.cost, cell.distance, cell.visited) == (6, 0, True)


def test_end_cell_sets_max_cost_even_when_smaller():
    grid = generate_cluster(1)
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=3, distance=5, visited=True),)), end_id=3)
    assert grid.max_cost == 5
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=3, distance=2, visited=True),)), end_id=3)
    assert grid.max_cost == 2


def test_max_cost_unchanged_without_end_entry():
    grid = generate_cluster(1)
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=0, distance=5),)), end_id=3)
    assert grid.max_cost == 1


def test_unknown_ids_are_ignored():
    grid = generate_cluster(1)
    before = _snapshot(grid)
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=40, distance=1),)), end_id=3)
    assert _snapshot(grid) == before


def test_end_entry_without_distance_keeps_max_cost():
    grid = generate_cluster(1)
    grid.get_cell(3).distance = 9
    merge_step_result(grid, StepResult(nodes=(NodeUpdate(id=3, visited=True),)), end_id=3)
    assert grid.get_cell(3).visited is True
    assert grid.max_cost == 1
