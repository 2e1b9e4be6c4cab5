"""
網格佈局演算法模組
Grid Layout Algorithm Module

將節點依列優先順序排入矩形網格，忽略依賴關係，適用於：
- 快速預覽大量節點
- 未知演算法時的安全回退
"""

import math
from typing import Any, Optional

from .options import GridOptions, coerce_options
from .types import LayoutResult, Position, as_nodes, ordered_nodes


# 相鄰格子的最小間距，可用空間為零時仍保持節點不重疊
MIN_CELL_SPACING = 1.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def grid_columns(node_count: int, width: float, height: float,
                 columns: Optional[int] = None) -> int:
    """
    計算網格欄數。

    未指定時取 round(sqrt(n * 長寬比))，介於 1 與節點數之間。
    長寬比無法計算（高度非正、寬高非有限值）時視為 1。
    """
    if columns:
        return columns
    aspect_ratio = width / height if height > 0 else 1.0
    if not math.isfinite(aspect_ratio):
        aspect_ratio = 1.0
    estimate = math.sqrt(max(0.0, node_count * aspect_ratio))
    calculated = _round_half_up(estimate) if math.isfinite(estimate) else node_count
    return max(1, min(calculated, node_count))


def _cell_spacing(spacing: float, available: float, gaps: int) -> float:
    value = min(spacing, available / gaps)
    if not abs(value) >= MIN_CELL_SPACING:
        return MIN_CELL_SPACING
    return value


def layout_grid(
    nodes: Any,
    edges: Any = None,
    width: float = 800,
    height: float = 600,
    options: Any = None,
) -> LayoutResult:
    """
    計算網格佈局的節點位置。

    格距取「指定間距」與「剛好填滿扣除邊界後可用空間的間距」兩者之小，
    節點少時不會超出視窗。每個節點佔用獨立的格子，不會重疊；
    可用空間為零（例如寬度恰為兩倍邊界）時，格距以 MIN_CELL_SPACING 為下限。

    Args:
        nodes: 節點集合
        edges: 未使用，保留以符合統一介面
        width: 視窗寬度
        height: 視窗高度
        options: GridOptions 或參數字典

    Returns:
        節點位置字典 {node_id: Position}
    """
    opts, _ = coerce_options(GridOptions, options)
    node_list = ordered_nodes(as_nodes(nodes), opts.sort_nodes)

    if not node_list:
        return {}

    columns = grid_columns(len(node_list), width, height, opts.columns)
    rows = math.ceil(len(node_list) / columns)

    available_width = width - 2 * opts.margin
    available_height = height - 2 * opts.margin

    column_spacing = _cell_spacing(opts.spacing, available_width, max(columns - 1, 1))
    row_spacing = _cell_spacing(opts.spacing, available_height, max(rows - 1, 1))

    positions: LayoutResult = {}
    for index, node in enumerate(node_list):
        row = index // columns
        col = index % columns
        positions[node.id] = Position(
            opts.margin + col * column_spacing,
            opts.margin + row * row_spacing,
        )

    return positions
