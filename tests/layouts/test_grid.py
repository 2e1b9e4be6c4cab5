import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))  # noqa: E402

import pytest  # noqa: E402
from graph_layouts import (  # noqa: E402
    GridOptions,
    LayoutType,
    Node,
    Position,
    create_layout,
    layout_grid,
)
from graph_layouts.grid import MIN_CELL_SPACING, grid_columns  # noqa: E402


def make_nodes(*ids):
    return [{"id": node_id, "label": f"Node {node_id}"} for node_id in ids]


def test_five_nodes_fill_two_columns():
    """5 個節點、400x400：2 欄 3 列，第三個節點落在第二列第一欄"""
    nodes = make_nodes("A", "B", "C", "D", "E")
    pos = layout_grid(nodes, [], 400, 400, {"margin": 40, "spacing": 150})

    assert pos["A"] == Position(40, 40)
    assert pos["B"] == Position(190, 40)
    assert pos["C"] == Position(40, 40 + min(150, (400 - 80) / 2))
    assert pos["E"] == Position(40, 340)


def test_empty_nodes():
    assert layout_grid([], [], 800, 600) == {}


def test_positions_never_overlap():
    nodes = make_nodes(*[f"N{i:02d}" for i in range(17)])
    pos = layout_grid(nodes, [], 800, 600)

    assert set(pos) == {n["id"] for n in nodes}
    assert len({p.as_tuple() for p in pos.values()}) == len(nodes)


def test_explicit_columns():
    nodes = make_nodes(*"ABCDEFG")
    pos = layout_grid(nodes, [], 800, 600, GridOptions(columns=3))

    assert pos["A"].y == pos["B"].y == pos["C"].y
    assert pos["D"].x == pos["A"].x
    assert pos["G"].x == pos["A"].x
    assert pos["G"].y > pos["D"].y > pos["A"].y


def test_small_graph_stays_inside_viewport():
    nodes = make_nodes("A", "B", "C")
    pos = layout_grid(nodes, [], 200, 200, {"margin": 40, "spacing": 150})

    for p in pos.values():
        assert 40 <= p.x <= 160
        assert 40 <= p.y <= 160


def test_sort_by_id():
    nodes = make_nodes("c", "a", "b")
    pos = layout_grid(nodes, [], 800, 600, {"sortNodes": True})

    assert pos["a"] == Position(40, 40)


def test_sort_with_comparator():
    nodes = make_nodes("a", "b", "c")

    def descending(x: Node, y: Node) -> int:
        return (x.id < y.id) - (x.id > y.id)

    pos = layout_grid(nodes, [], 800, 600, {"sort_nodes": descending})
    assert pos["c"] == Position(40, 40)


def test_does_not_mutate_input():
    nodes = make_nodes("A", "B")
    snapshot = [dict(n) for n in nodes]
    layout_grid(nodes, [], 800, 600, {"sortNodes": True})
    assert nodes == snapshot


def test_zero_height_viewport():
    pos = layout_grid(make_nodes("A", "B", "C", "D"), [], 400, 0)
    assert len(pos) == 4


def test_deterministic():
    nodes = make_nodes(*"QWERTY")
    assert layout_grid(nodes, [], 640, 480) == layout_grid(nodes, [], 640, 480)


@pytest.mark.parametrize("bad", [{"margin": "wide"}, {"spacing": -5}, {"columns": 2.5}])
def test_malformed_options_use_defaults(bad):
    nodes = make_nodes("A", "B", "C")
    assert layout_grid(nodes, [], 800, 600, bad) == layout_grid(nodes, [], 800, 600)


def test_tiny_height_does_not_overflow():
    # 800 / 1e-310 溢位為 inf，長寬比改用 1
    pos = layout_grid(make_nodes("A", "B"), [], 800, 1e-310)

    assert set(pos) == {"A", "B"}
    assert pos["A"] != pos["B"]
    for p in pos.values():
        assert math.isfinite(p.x) and math.isfinite(p.y)


def test_infinite_width_through_fallback():
    outcome = create_layout(make_nodes("A"), [], "nope", float("inf"), 600)

    assert outcome.layout_type is LayoutType.GRID
    assert outcome.positions == {"A": Position(40, 40)}


def test_auto_columns_never_exceed_node_count():
    assert grid_columns(3, 1e300, 1) == 3
    assert grid_columns(1, 800, 600) == 1
    assert grid_columns(5, float("nan"), 600) == 2


def test_zero_available_width_keeps_nodes_apart():
    # 寬度恰為兩倍邊界，可用寬度為 0
    nodes = make_nodes("A", "B", "C")
    pos = layout_grid(nodes, [], 80, 600, {"margin": 40, "columns": 3})

    assert len({p.as_tuple() for p in pos.values()}) == 3
    assert pos["B"].x - pos["A"].x == MIN_CELL_SPACING
