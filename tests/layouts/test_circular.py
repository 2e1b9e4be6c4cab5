import sys
import math
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))  # noqa: E402

import pytest  # noqa: E402
from graph_layouts import CircularOptions, layout_circular  # noqa: E402


NODES = [{"id": f"N{i}"} for i in range(8)]


def distance(p, cx, cy):
    return math.hypot(p.x - cx, p.y - cy)


def test_all_nodes_on_circle():
    pos = layout_circular(NODES, [], 800, 600)

    assert set(pos) == {n["id"] for n in NODES}
    for p in pos.values():
        assert distance(p, 400, 300) == pytest.approx(240)


def test_custom_center_and_radius():
    opts = CircularOptions(center_x=10, center_y=-20, radius=50)
    pos = layout_circular(NODES, [], 800, 600, opts)

    for p in pos.values():
        assert distance(p, 10, -20) == pytest.approx(50)


def test_start_angle_places_first_node():
    pos = layout_circular(NODES, [], 800, 600, {"startAngle": math.pi / 2, "radius": 100})

    assert pos["N0"].x == pytest.approx(400)
    assert pos["N0"].y == pytest.approx(400)


def test_equal_angular_spacing():
    pos = layout_circular(NODES[:4], [], 400, 400, {"radius": 100})

    assert pos["N1"].x == pytest.approx(200)
    assert pos["N1"].y == pytest.approx(300)
    assert pos["N2"].x == pytest.approx(100)


def test_donut_alternates_radii():
    pos = layout_circular(NODES, [], 800, 600, {"isDonut": True, "radius": 200})

    for i in range(8):
        expected = 200 if i % 2 == 0 else 100
        assert distance(pos[f"N{i}"], 400, 300) == pytest.approx(expected)


def test_donut_inner_radius():
    pos = layout_circular(NODES, [], 800, 600, {"is_donut": True, "radius": 200, "inner_radius": 30})
    assert distance(pos["N1"], 400, 300) == pytest.approx(30)


def test_sorted_nodes_change_angle_order():
    nodes = [{"id": "b"}, {"id": "a"}]
    pos = layout_circular(nodes, [], 400, 400, {"sortNodes": True, "radius": 100})

    assert pos["a"].x == pytest.approx(300)
    assert pos["b"].x == pytest.approx(100)


def test_empty_and_single():
    assert layout_circular([], [], 800, 600) == {}
    pos = layout_circular([{"id": "only"}], [], 800, 600)
    assert distance(pos["only"], 400, 300) == pytest.approx(240)


def test_deterministic():
    assert layout_circular(NODES, [], 800, 600) == layout_circular(NODES, [], 800, 600)
