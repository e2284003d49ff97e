import json

import pytest

from hex_stepper.config import ENVELOPE_FLAT, ENVELOPE_GRID_DATA
from hex_stepper.errors import ProtocolError
from hex_stepper.grid import generate_cluster
from hex_stepper.protocol import NodeUpdate, build_step_request, encode_request, parse_step_response

NODE_KEYS = {"id", "state", "q", "r", "s", "x", "y", "cost", "distance", "visited", "neighbors"}


def test_request_snapshots_every_cell():
    grid = generate_cluster(1)
    grid.get_cell(2).cost = 4
    request = build_step_request(grid, 0, 3)
    assert request.start_id == 0
    assert request.end_id == 3
    assert [node.id for node in request.nodes] == list(range(7))
    node = request.nodes[2]
    assert (node.q, node.r, node.s, node.cost) == (0, -1, 1, 4)
    assert set(node.to_payload()) == NODE_KEYS


def test_request_is_a_snapshot():
    grid = generate_cluster(1)
    request = build_step_request(grid, 0, 3)
    grid.get_cell(0).distance = 12
    assert request.nodes[0].distance == 0


def test_neighbors_empty_until_cached():
    grid = generate_cluster(1)
    assert build_step_request(grid, 0, 3).nodes[3].neighbors == ()
    grid.cache_neighbors()
    assert len(build_step_request(grid, 0, 3).nodes[3].neighbors) == 6


def test_request_rejects_unknown_ids():
    grid = generate_cluster(1)
    with pytest.raises(ValueError):
        build_step_request(grid, 0, 7)


def test_grid_data_envelope():
    request = build_step_request(generate_cluster(1), 0, 3)
    line = encode_request(request, ENVELOPE_GRID_DATA)
    assert line.endswith("\n")
    assert "\n" not in line[:-1]
    payload = json.loads(line)
    assert set(payload) == {"gridData", "startId", "endId"}
    assert (payload["startId"], payload["endId"]) == (0, 3)
    assert len(payload["gridData"]["nodes"]) == 7


def test_flat_envelope():
    request = build_step_request(generate_cluster(1), 2, 5)
    payload = json.loads(encode_request(request, ENVELOPE_FLAT))
    assert set(payload) == {"nodes", "startId", "endId"}
    assert payload["nodes"][0]["state"] == "OPEN"


def test_unknown_envelope():
    request = build_step_request(generate_cluster(0), 0, 0)
    with pytest.raises(ValueError):
        encode_request(request, "xml")


def test_parse_valid_response():
    result = parse_step_response('{"nodes": [{"id": 3, "distance": 5, "cost": 1, "visited": true}]}')
    assert result.nodes == (NodeUpdate(id=3, distance=5, cost=1, visited=True),)


def test_parse_tolerates_extra_and_missing_fields():
    text = json.dumps({"nodes": [{"id": 1, "state": "OPEN", "q": 0}, {"id": 2, "visited": False}], "extra": 1})
    result = parse_step_response(text)
    assert result.nodes[0] == NodeUpdate(id=1)
    assert result.nodes[1] == NodeUpdate(id=2, visited=False)


def test_first_duplicate_wins():
    result = parse_step_response('{"nodes": [{"id": 1, "distance": 2}, {"id": 1, "distance": 9}]}')
    assert result.by_id()[1].distance == 2


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   \n",
        "not json",
        "[1, 2]",
        '{"result": []}',
        '{"nodes": {"id": 1}}',
        '{"nodes": [3]}',
        '{"nodes": [{"distance": 1}]}',
        '{"nodes": [{"id": "3"}]}',
        '{"nodes": [{"id": true}]}',
        '{"nodes": [{"id": 1, "distance": -1}]}',
        '{"nodes": [{"id": 1, "cost": "cheap"}]}',
        '{"nodes": [{"id": 1, "cost": NaN}]}',
        '{"nodes": [{"id": 1, "visited": "yes"}]}',
        '{"nodes": [{"id": 1, "visited": 1}]}',
    ],
)
def test_parse_rejects_malformed_output(text):
    with pytest.raises(ProtocolError):
        parse_step_response(text)
