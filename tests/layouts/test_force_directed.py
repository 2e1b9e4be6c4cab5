import sys
import math
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))  # noqa: E402

import numpy as np  # noqa: E402
import pytest  # noqa: E402
from graph_layouts import ForceOptions, layout_force_directed  # noqa: E402
from graph_layouts.force_directed import VIEWPORT_PADDING, simulate  # noqa: E402


def ring_graph(n):
    nodes = [{"id": f"N{i}"} for i in range(n)]
    edges = [(f"N{i}", f"N{(i + 1) % n}") for i in range(n)]
    return nodes, edges


def test_covers_every_node():
    nodes, edges = ring_graph(12)
    pos = layout_force_directed(nodes, edges, 800, 600, {"seed": 3})
    assert set(pos) == {n["id"] for n in nodes}


def test_empty_graph():
    assert layout_force_directed([], [], 800, 600) == {}


def test_positions_stay_inside_padding():
    nodes, edges = ring_graph(20)
    width, height = 400, 300
    pos = layout_force_directed(nodes, edges, width, height, ForceOptions(seed=7, prevent_overlap=True))

    for p in pos.values():
        assert VIEWPORT_PADDING <= p.x <= width - VIEWPORT_PADDING
        assert VIEWPORT_PADDING <= p.y <= height - VIEWPORT_PADDING


def test_same_seed_reproduces_layout():
    nodes, edges = ring_graph(10)
    first = layout_force_directed(nodes, edges, 800, 600, {"seed": 42})
    second = layout_force_directed(nodes, edges, 800, 600, {"seed": 42})
    assert first == second


def test_different_seeds_differ():
    nodes, edges = ring_graph(10)
    first = layout_force_directed(nodes, edges, 800, 600, {"seed": 1})
    second = layout_force_directed(nodes, edges, 800, 600, {"seed": 2})
    assert first != second


def test_circle_start_is_deterministic():
    nodes, edges = ring_graph(6)
    opts = {"randomizeInitialPositions": False}
    assert layout_force_directed(nodes, edges, 800, 600, opts) == \
        layout_force_directed(nodes, edges, 800, 600, opts)


def test_zero_iterations_returns_initial_circle():
    nodes = [{"id": f"N{i}"} for i in range(4)]
    opts = ForceOptions(iterations=0, randomize_initial_positions=False)
    pos = layout_force_directed(nodes, [], 400, 400, opts)

    # 半徑 = min(w, h) * 0.3
    assert pos["N0"].x == pytest.approx(320)
    assert pos["N0"].y == pytest.approx(200)
    assert pos["N1"].x == pytest.approx(200)
    assert pos["N1"].y == pytest.approx(320)


def test_random_start_within_central_area():
    nodes = [{"id": f"N{i}"} for i in range(50)]
    pos = layout_force_directed(nodes, [], 1000, 500, {"iterations": 0, "seed": 5})

    for p in pos.values():
        assert 100 <= p.x <= 900
        assert 50 <= p.y <= 450


def test_symmetric_pair_stays_symmetric():
    nodes = [{"id": "A"}, {"id": "B"}]
    opts = {"randomizeInitialPositions": False, "preventOverlap": False}
    pos = layout_force_directed(nodes, [("A", "B")], 800, 600, opts)

    assert pos["A"].x + pos["B"].x == pytest.approx(800)
    assert pos["A"].y == pytest.approx(300)
    assert pos["B"].y == pytest.approx(300)


def test_disconnected_nodes_remain_finite():
    nodes = [{"id": f"N{i}"} for i in range(15)]
    pos = layout_force_directed(nodes, [], 800, 600, {"seed": 11, "preventOverlap": False})

    for p in pos.values():
        assert math.isfinite(p.x) and math.isfinite(p.y)


def test_dangling_edges_are_ignored():
    nodes = [{"id": "A"}, {"id": "B"}]
    edges = [("A", "ghost"), {"source": "ghost", "target": "B"}, ("A", "B")]
    pos = layout_force_directed(nodes, edges, 800, 600, {"seed": 9})
    assert set(pos) == {"A", "B"}


def test_simulate_does_not_modify_start():
    start = np.array([[100.0, 100.0], [300.0, 200.0]])
    copy = start.copy()
    simulate(start, np.array([[0, 1]]), 400, 300, ForceOptions())
    assert np.array_equal(start, copy)


def test_spring_pulls_distant_pair_together():
    start = np.array([[0.0, 0.0], [600.0, 0.0]])
    opts = ForceOptions(iterations=1, repulsion_force=0, center_gravity=0, prevent_overlap=False)
    end = simulate(start, np.array([[0, 1]]), 800, 600, opts)

    # (600 - 100) * 0.1 = 50，乘上溫度 0.1
    assert end[0, 0] == pytest.approx(5.0)
    assert end[1, 0] == pytest.approx(595.0)
