"""
力導向佈局演算法模組
Force-Directed Layout Algorithm Module

使用物理模擬的彈簧模型：所有節點兩兩互斥（平方反比），
每條邊是自然長度為 link_distance 的彈簧，再加上指向視窗中心的重力。
速度帶阻尼，溫度每輪按冷卻係數遞減，使系統收斂到局部平衡。

節點在模擬期間以連續整數索引存放於 numpy 陣列，
排斥力計算為 O(n²)，節點數量多時請自行限制 iterations。
"""

import logging
from typing import Any, Dict, List

import numpy as np

from .options import ForceOptions, coerce_options
from .types import Edge, LayoutResult, Node, Position, as_edges, as_nodes

logger = logging.getLogger(__name__)

# 速度阻尼
DAMPING = 0.9
# prevent_overlap 時與視窗邊界保留的距離
VIEWPORT_PADDING = 50.0
# 距離下限，避免除以零
MIN_DISTANCE = 0.1


def _initial_positions(
    node_count: int,
    width: float,
    height: float,
    opts: ForceOptions,
) -> np.ndarray:
    """產生初始座標：視窗中央 80% 範圍內隨機，或排成圓形"""
    center = np.array([width / 2, height / 2])

    if opts.randomize_initial_positions:
        rng = np.random.default_rng(opts.seed)
        offsets = rng.random((node_count, 2)) - 0.5
        return center + offsets * np.array([width * 0.8, height * 0.8])

    angles = 2 * np.pi * np.arange(node_count) / node_count
    radius = min(width, height) * 0.3
    return center + radius * np.column_stack((np.cos(angles), np.sin(angles)))


def _edge_index_array(
    index_of: Dict[str, int],
    edges: List[Edge],
) -> np.ndarray:
    """將邊轉為 (m, 2) 的索引陣列，懸空邊略過，平行邊保留"""
    pairs = [
        (index_of[edge.source], index_of[edge.target])
        for edge in edges
        if edge.source in index_of and edge.target in index_of
    ]
    if not pairs:
        return np.empty((0, 2), dtype=int)
    return np.array(pairs, dtype=int)


def _repulsion(pos: np.ndarray, strength: float) -> np.ndarray:
    # delta[i, j] = pos[j] - pos[i]
    delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    distance = np.maximum(np.hypot(delta[..., 0], delta[..., 1]), MIN_DISTANCE)
    magnitude = strength / (distance * distance)
    # 對角線 delta 為零，自身不貢獻
    return -np.sum(delta / distance[..., np.newaxis] * magnitude[..., np.newaxis], axis=1)


def _attraction(pos: np.ndarray, edge_index: np.ndarray,
                link_distance: float, strength: float) -> np.ndarray:
    forces = np.zeros_like(pos)
    if len(edge_index) == 0:
        return forces

    src, dst = edge_index[:, 0], edge_index[:, 1]
    delta = pos[dst] - pos[src]
    distance = np.maximum(np.hypot(delta[:, 0], delta[:, 1]), MIN_DISTANCE)
    magnitude = (distance - link_distance) * strength
    pull = delta / distance[:, np.newaxis] * magnitude[:, np.newaxis]

    np.add.at(forces, src, pull)
    np.add.at(forces, dst, -pull)
    return forces


def simulate(
    pos: np.ndarray,
    edge_index: np.ndarray,
    width: float,
    height: float,
    opts: ForceOptions,
) -> np.ndarray:
    """
    執行彈簧模擬，回傳最終座標陣列。

    Args:
        pos: (n, 2) 初始座標，不會被修改
        edge_index: (m, 2) 邊的端點索引
        width: 視窗寬度
        height: 視窗高度
        opts: 模擬參數

    Returns:
        (n, 2) 最終座標
    """
    pos = np.array(pos, dtype=float)
    velocity = np.zeros_like(pos)
    center = np.array([width / 2, height / 2])
    temperature = opts.initial_temperature

    for _ in range(opts.iterations):
        forces = _repulsion(pos, opts.repulsion_force)
        forces += _attraction(pos, edge_index, opts.link_distance, opts.attraction_force)
        forces += (center - pos) * opts.center_gravity

        velocity = velocity * DAMPING + forces * temperature
        pos += velocity

        if opts.prevent_overlap:
            # 寬高不足兩倍 padding 時貼齊下限
            pos[:, 0] = np.maximum(VIEWPORT_PADDING, np.minimum(width - VIEWPORT_PADDING, pos[:, 0]))
            pos[:, 1] = np.maximum(VIEWPORT_PADDING, np.minimum(height - VIEWPORT_PADDING, pos[:, 1]))

        temperature *= opts.cooling_factor

    return pos


def layout_force_directed(
    nodes: Any,
    edges: Any = None,
    width: float = 800,
    height: float = 600,
    options: Any = None,
) -> LayoutResult:
    """
    計算力導向佈局的節點位置。

    隨機初始化且未指定 seed 時，每次結果不同；指定 seed 或關閉
    randomize_initial_positions 即可重現。

    Args:
        nodes: 節點集合
        edges: 邊集合
        width: 視窗寬度
        height: 視窗高度
        options: ForceOptions 或參數字典

    Returns:
        節點位置字典 {node_id: Position}
    """
    opts, _ = coerce_options(ForceOptions, options)
    node_list: List[Node] = as_nodes(nodes)

    if not node_list:
        return {}

    index_of = {node.id: i for i, node in enumerate(node_list)}
    edge_index = _edge_index_array(index_of, as_edges(edges))

    logger.debug(
        "力導向佈局：%d 個節點，%d 條邊，%d 次迭代",
        len(node_list), len(edge_index), opts.iterations,
    )

    start = _initial_positions(len(node_list), width, height, opts)
    final = simulate(start, edge_index, width, height, opts)

    return {
        node.id: Position(float(final[i, 0]), float(final[i, 1]))
        for i, node in enumerate(node_list)
    }
