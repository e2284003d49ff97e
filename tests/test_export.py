import json

from hex_stepper.export import export_grid_json, write_grid_export
from hex_stepper.grid import generate_cluster


def test_export_is_pretty_printed_with_neighbors():
    grid = generate_cluster(1)
    text = export_grid_json(grid)
    assert text.startswith('{\n  "nodes": [')
    payload = json.loads(text)
    assert len(payload["nodes"]) == 7
    center = payload["nodes"][3]
    assert (center["q"], center["r"], center["s"]) == (0, 0, 0)
    assert sorted(center["neighbors"]) == [0, 1, 2, 4, 5, 6]
    assert payload["nodes"][0]["neighbors"] == [3, 2, 1]


def test_write_grid_export(tmp_path):
    grid = generate_cluster(2)
    target = write_grid_export(grid, tmp_path / "out" / "grid.json")
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [node["id"] for node in payload["nodes"]] == list(range(19))
