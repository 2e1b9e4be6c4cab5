"""
佈局工廠
Layout Factory

以單一查找表把演算法名稱對應到佈局函數：
- spiral 使用放射狀佈局
- donut 使用環形佈局並強制 is_donut
- 未知名稱回退為網格佈局，不拋例外，改以 diagnostic 欄位回報
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from .circular import layout_circular
from .force_directed import layout_force_directed
from .grid import layout_grid
from .options import (
    CircularOptions,
    ForceOptions,
    GridOptions,
    RadialOptions,
    TreeOptions,
    coerce_options,
)
from .radial import layout_radial
from .tree import layout_tree
from .types import LayoutResult, Node, Position, as_nodes

logger = logging.getLogger(__name__)


class LayoutType(Enum):
    """支援的佈局演算法"""
    FORCE = "force"
    CIRCULAR = "circular"
    TREE = "tree"
    SPIRAL = "spiral"
    DONUT = "donut"
    GRID = "grid"
    RADIAL = "radial"


LayoutFunction = Callable[[Any, Any, float, float, Any], LayoutResult]


def _layout_donut(nodes: Any, edges: Any, width: float, height: float,
                  options: Any = None) -> LayoutResult:
    opts, _ = coerce_options(CircularOptions, options)
    return layout_circular(nodes, edges, width, height, replace(opts, is_donut=True))


# 演算法查找表
LAYOUTS: Dict[LayoutType, LayoutFunction] = {
    LayoutType.FORCE: layout_force_directed,
    LayoutType.CIRCULAR: layout_circular,
    LayoutType.TREE: layout_tree,
    LayoutType.SPIRAL: layout_radial,
    LayoutType.DONUT: _layout_donut,
    LayoutType.GRID: layout_grid,
    LayoutType.RADIAL: layout_radial,
}

# 各演算法對應的參數類別，用於回報無效欄位
OPTION_TYPES: Dict[LayoutType, Type] = {
    LayoutType.FORCE: ForceOptions,
    LayoutType.CIRCULAR: CircularOptions,
    LayoutType.TREE: TreeOptions,
    LayoutType.SPIRAL: RadialOptions,
    LayoutType.DONUT: CircularOptions,
    LayoutType.GRID: GridOptions,
    LayoutType.RADIAL: RadialOptions,
}


@dataclass
class LayoutOutcome:
    """
    佈局結果與診斷資訊。

    Attributes:
        positions: 節點位置 {node_id: Position}
        layout_type: 實際使用的演算法
        diagnostic: 回退等非致命狀況的說明，正常時為 None
        ignored_options: 格式錯誤而改用預設值的參數欄位
    """
    positions: LayoutResult
    layout_type: LayoutType
    diagnostic: Optional[str] = None
    ignored_options: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.diagnostic is None and not self.ignored_options


def resolve_layout_type(layout_type: Any) -> Optional[LayoutType]:
    """將字串或 LayoutType 轉為 LayoutType，無法辨識時回傳 None"""
    if isinstance(layout_type, LayoutType):
        return layout_type
    if isinstance(layout_type, str):
        try:
            return LayoutType(layout_type.strip().lower())
        except ValueError:
            return None
    return None


def get_layout_function(layout_type: Any) -> LayoutFunction:
    """取得演算法對應的佈局函數，未知名稱回傳網格佈局"""
    resolved = resolve_layout_type(layout_type)
    return LAYOUTS[resolved or LayoutType.GRID]


def create_layout(
    nodes: Any,
    edges: Any,
    layout_type: Any,
    width: float,
    height: float,
    options: Any = None,
) -> LayoutOutcome:
    """
    以指定演算法計算佈局。

    Args:
        nodes: 節點集合
        edges: 邊集合
        layout_type: 演算法名稱或 LayoutType
        width: 視窗寬度
        height: 視窗高度
        options: 該演算法的參數（dataclass 或字典）

    Returns:
        LayoutOutcome，positions 的鍵集合恆等於輸入節點 id 集合
    """
    resolved = resolve_layout_type(layout_type)
    diagnostic = None
    if resolved is None:
        diagnostic = f"Unknown layout type: {layout_type!r}. Falling back to grid layout."
        logger.debug("%s", diagnostic)
        resolved = LayoutType.GRID

    _, ignored = coerce_options(OPTION_TYPES[resolved], options)
    positions = LAYOUTS[resolved](nodes, edges, width, height, options)

    return LayoutOutcome(
        positions=positions,
        layout_type=resolved,
        diagnostic=diagnostic,
        ignored_options=ignored,
    )


def apply_layout(nodes: Any, positions: Mapping[str, Position]) -> List[Node]:
    """
    將座標寫入節點屬性副本（x, y），不修改原節點。

    沒有座標的節點原樣回傳。
    """
    result = []
    for node in as_nodes(nodes):
        position = positions.get(node.id)
        if position is None:
            result.append(node)
            continue
        attrs = dict(node.attrs)
        attrs["x"] = position.x
        attrs["y"] = position.y
        result.append(Node(node.id, attrs))
    return result


def layout_bounds(positions: Mapping[str, Position]) -> Optional[Tuple[float, float, float, float]]:
    """回傳 (min_x, min_y, max_x, max_y)，空佈局回傳 None"""
    if not positions:
        return None
    xs = [p.x for p in positions.values()]
    ys = [p.y for p in positions.values()]
    return (min(xs), min(ys), max(xs), max(ys))


def center_layout(positions: Mapping[str, Position]) -> LayoutResult:
    """平移佈局，使外框中心落在原點"""
    bounds = layout_bounds(positions)
    if bounds is None:
        return {}
    min_x, min_y, max_x, max_y = bounds
    cx = (min_x + max_x) / 2
    cy = (min_y + max_y) / 2
    return {node_id: Position(p.x - cx, p.y - cy) for node_id, p in positions.items()}
