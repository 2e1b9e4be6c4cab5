"""
樹狀佈局演算法模組
Tree Layout Algorithm Module

從根節點沿出邊做 BFS 分層，再依方向把層級映射到垂直或水平軸。
同層節點在交叉軸上平均分佈，並以 level_balancing 讓節點較少的層
往最寬層的中央靠攏。
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, List

import networkx as nx

from .options import RootSelection, TreeOptions, coerce_options
from .types import (
    Edge,
    LayoutResult,
    Node,
    Position,
    as_edges,
    as_nodes,
    build_directed_graph,
    connection_counts,
    valid_edges,
)

logger = logging.getLogger(__name__)


def select_root(nodes: List[Node], edges: List[Edge], graph: nx.DiGraph,
                opts: TreeOptions) -> str:
    """依參數挑選根節點，平手時取輸入順序較前者"""
    node_ids = [node.id for node in nodes]

    if opts.root_id is not None and opts.root_id in graph:
        return opts.root_id

    method = opts.root_selection_method
    if method == RootSelection.FIRST:
        return node_ids[0]
    if method == RootSelection.MOST_CONNECTIONS:
        counts = connection_counts(nodes, edges)
        return max(node_ids, key=lambda node_id: counts[node_id])
    incoming = Counter(edge.target for edge in valid_edges(graph.nodes, edges))
    return min(node_ids, key=lambda node_id: incoming[node_id])


def assign_levels(graph: nx.DiGraph, node_ids: List[str], root: str) -> Dict[str, int]:
    """
    計算每個節點的層級。

    1. 從根沿出邊 BFS，層級 = 深度
    2. 根到不了的節點依輸入順序各自開一個新層（接在目前最深層之後），
       其尚未分層的出邊、入邊鄰居併入同一層
    """
    levels = dict(nx.single_source_shortest_path_length(graph, root))
    next_level = max(levels.values()) + 1

    for node_id in node_ids:
        if node_id in levels:
            continue

        levels[node_id] = next_level
        for neighbor in list(graph.successors(node_id)) + list(graph.predecessors(node_id)):
            if neighbor not in levels:
                levels[neighbor] = next_level
        next_level += 1

    return levels


def layout_tree(
    nodes: Any,
    edges: Any = None,
    width: float = 800,
    height: float = 600,
    options: Any = None,
) -> LayoutResult:
    """
    計算樹狀佈局的節點位置。

    Args:
        nodes: 節點集合
        edges: 邊集合（有向，自迴圈與懸空邊忽略）
        width: 視窗寬度
        height: 視窗高度
        options: TreeOptions 或參數字典

    Returns:
        節點位置字典 {node_id: Position}
    """
    opts, _ = coerce_options(TreeOptions, options)
    node_list = as_nodes(nodes)

    if not node_list:
        return {}

    edge_list = as_edges(edges)
    graph = build_directed_graph(node_list, edge_list)
    node_ids = [node.id for node in node_list]

    root = select_root(node_list, edge_list, graph, opts)
    levels = assign_levels(graph, node_ids, root)
    logger.debug("樹狀佈局根節點: %s，共 %d 層", root, max(levels.values()) + 1)

    nodes_at_level: Dict[int, List[str]] = defaultdict(list)
    for node_id, level in levels.items():
        nodes_at_level[level].append(node_id)

    max_nodes_in_level = max(len(ids) for ids in nodes_at_level.values())

    direction = opts.direction
    h_spacing = opts.horizontal_spacing
    v_spacing = opts.vertical_spacing

    # 交叉軸可用長度
    if direction.is_horizontal:
        level_span = height - 2 * v_spacing
    else:
        level_span = width - 2 * h_spacing

    positions: LayoutResult = {}
    for level, level_ids in nodes_at_level.items():
        count = len(level_ids)
        spacing = level_span / (count - 1) if count > 1 else 0.0
        balance_offset = opts.level_balancing * (max_nodes_in_level - count) * spacing / 2

        for index, node_id in enumerate(level_ids):
            if direction.is_horizontal:
                if direction.is_reversed:
                    x = width - h_spacing - level * h_spacing
                else:
                    x = h_spacing + level * h_spacing
                y = v_spacing + balance_offset + index * spacing if count > 1 else height / 2
            else:
                if direction.is_reversed:
                    y = height - v_spacing - level * v_spacing
                else:
                    y = v_spacing + level * v_spacing
                x = h_spacing + balance_offset + index * spacing if count > 1 else width / 2

            positions[node_id] = Position(x, y)

    return positions
