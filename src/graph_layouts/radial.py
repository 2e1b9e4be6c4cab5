"""
放射狀佈局演算法模組
Radial Layout Algorithm Module

以中心節點為圓心，依 BFS 深度把其餘節點排在同心圓上。
中心節點可指定，或以「第一個」、「連線最多」、「最中心」挑選。
"""

import logging
import math
from collections import defaultdict
from typing import Any, Dict, List

import networkx as nx

from .options import CenterSelection, RadialOptions, coerce_options
from .types import (
    Edge,
    LayoutResult,
    Node,
    Position,
    as_edges,
    as_nodes,
    build_undirected_graph,
    connection_counts,
)

logger = logging.getLogger(__name__)


def most_central_node(graph: nx.Graph, node_ids: List[str]) -> str:
    """
    回傳到其他所有節點最短路徑距離總和最小的節點。

    每個候選節點各跑一次 BFS，最差為 O(n·(n+e))；
    不可達的節點以 n 計入距離。平手時取輸入順序較前者。
    """
    penalty = len(node_ids)
    best_id = node_ids[0]
    best_sum = None

    for node_id in node_ids:
        distances = nx.single_source_shortest_path_length(graph, node_id)
        total = sum(distances.get(other, penalty) for other in node_ids)
        if best_sum is None or total < best_sum:
            best_id, best_sum = node_id, total

    return best_id


def select_center(nodes: List[Node], edges: List[Edge], graph: nx.Graph,
                  opts: RadialOptions) -> str:
    """依參數挑選中心節點"""
    node_ids = [node.id for node in nodes]

    if opts.center_node_id is not None and opts.center_node_id in graph:
        return opts.center_node_id

    method = opts.center_selection_method
    if method == CenterSelection.FIRST:
        return node_ids[0]
    if method == CenterSelection.MOST_CONNECTIONS:
        counts = connection_counts(nodes, edges)
        return max(node_ids, key=lambda node_id: counts[node_id])
    return most_central_node(graph, node_ids)


def assign_rings(graph: nx.Graph, node_ids: List[str], center: str) -> Dict[str, int]:
    """
    以 BFS 深度作為環的編號。

    中心為第 0 環；與中心不連通的節點放在第 1 環。
    回傳字典依 BFS 順序排列，不可達節點接在後面（保持輸入順序）。
    """
    levels = dict(nx.single_source_shortest_path_length(graph, center))
    for node_id in node_ids:
        if node_id not in levels:
            levels[node_id] = 1
    return levels


def _sort_ring(ring: List[str], level: int, graph: nx.Graph,
               levels: Dict[str, int]) -> List[str]:
    # 與前一環相連越多的節點排越前面，維持相關節點角度相近
    def previous_ring_links(node_id: str) -> int:
        return sum(1 for neighbor in graph.neighbors(node_id)
                   if levels[neighbor] == level - 1)

    return sorted(ring, key=previous_ring_links, reverse=True)


def layout_radial(
    nodes: Any,
    edges: Any = None,
    width: float = 800,
    height: float = 600,
    options: Any = None,
) -> LayoutResult:
    """
    計算放射狀佈局的節點位置。

    第 k 環半徑為 initial_radius + (k-1) * radius_increment，
    同環節點的角距為 max(min_angle_separation, 2π / 該環節點數)。

    Args:
        nodes: 節點集合
        edges: 邊集合（視為無向，自迴圈與懸空邊忽略）
        width: 視窗寬度
        height: 視窗高度
        options: RadialOptions 或參數字典

    Returns:
        節點位置字典 {node_id: Position}
    """
    opts, _ = coerce_options(RadialOptions, options)
    node_list = as_nodes(nodes)

    if not node_list:
        return {}

    edge_list = as_edges(edges)
    graph = build_undirected_graph(node_list, edge_list)
    node_ids = [node.id for node in node_list]

    center = select_center(node_list, edge_list, graph, opts)
    levels = assign_rings(graph, node_ids, center)
    logger.debug("放射狀佈局中心: %s（%s）", center, opts.center_selection_method.value)

    rings: Dict[int, List[str]] = defaultdict(list)
    for node_id, level in levels.items():
        rings[level].append(node_id)

    short_side = min(width, height)
    initial_radius = short_side * 0.2 if opts.initial_radius is None else opts.initial_radius
    radius_increment = short_side * 0.15 if opts.radius_increment is None else opts.radius_increment

    center_x = width / 2
    center_y = height / 2
    positions: LayoutResult = {center: Position(center_x, center_y)}

    for level in sorted(rings):
        if level == 0:
            continue

        ring = rings[level]
        if opts.sort_nodes_at_level:
            ring = _sort_ring(ring, level, graph, levels)

        radius = initial_radius + (level - 1) * radius_increment
        angle_step = max(opts.min_angle_separation, 2 * math.pi / len(ring))

        for index, node_id in enumerate(ring):
            angle = index * angle_step
            positions[node_id] = Position(
                center_x + radius * math.cos(angle),
                center_y + radius * math.sin(angle),
            )

    return positions
