"""
環形佈局演算法模組
Circular Layout Algorithm Module

節點以等角距排列在同一圓上；甜甜圈變體則讓奇偶節點交替落在
內外兩個同心圓，視覺上較不擁擠。
"""

import math
from typing import Any

from .options import CircularOptions, coerce_options
from .types import LayoutResult, Position, as_nodes, ordered_nodes


def layout_circular(
    nodes: Any,
    edges: Any = None,
    width: float = 800,
    height: float = 600,
    options: Any = None,
) -> LayoutResult:
    """
    計算環形（或甜甜圈）佈局的節點位置。

    Args:
        nodes: 節點集合
        edges: 未使用，保留以符合統一介面
        width: 視窗寬度
        height: 視窗高度
        options: CircularOptions 或參數字典

    Returns:
        節點位置字典 {node_id: Position}
    """
    opts, _ = coerce_options(CircularOptions, options)
    node_list = ordered_nodes(as_nodes(nodes), opts.sort_nodes)

    if not node_list:
        return {}

    center_x = width / 2 if opts.center_x is None else opts.center_x
    center_y = height / 2 if opts.center_y is None else opts.center_y
    radius = min(width, height) * 0.4 if opts.radius is None else opts.radius
    inner_radius = radius * 0.5 if opts.inner_radius is None else opts.inner_radius

    angle_step = 2 * math.pi / len(node_list)

    positions: LayoutResult = {}
    for index, node in enumerate(node_list):
        angle = opts.start_angle + angle_step * index

        node_radius = radius
        if opts.is_donut and index % 2 == 1:
            node_radius = inner_radius

        positions[node.id] = Position(
            center_x + node_radius * math.cos(angle),
            center_y + node_radius * math.sin(angle),
        )

    return positions
