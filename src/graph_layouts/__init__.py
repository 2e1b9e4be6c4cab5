"""
圖形佈局演算法套件
Graph Layout Algorithms Package

為抽象圖形（節點 + 邊）計算 2D 座標，供外部繪圖介面使用：
- 網格佈局：列優先的矩形網格
- 環形佈局：等角距圓形（含甜甜圈變體）
- 力導向佈局：彈簧模型物理模擬
- 放射狀佈局：以中心節點為圓心的同心圓
- 樹狀佈局：沿出邊分層的階層排列
"""

from .types import (
    Node,
    Edge,
    Position,
    LayoutResult,
    as_nodes,
    as_edges,
)
from .options import (
    GridOptions,
    CircularOptions,
    ForceOptions,
    RadialOptions,
    TreeOptions,
    CenterSelection,
    RootSelection,
    TreeDirection,
    coerce_options,
)
from .grid import layout_grid
from .circular import layout_circular
from .force_directed import layout_force_directed
from .radial import layout_radial
from .tree import layout_tree
from .factory import (
    LayoutType,
    LayoutOutcome,
    LAYOUTS,
    create_layout,
    get_layout_function,
    apply_layout,
    center_layout,
    layout_bounds,
)

__version__ = "0.1.0"

__all__ = [
    # 共用型別
    'Node',
    'Edge',
    'Position',
    'LayoutResult',
    'as_nodes',
    'as_edges',

    # 參數
    'GridOptions',
    'CircularOptions',
    'ForceOptions',
    'RadialOptions',
    'TreeOptions',
    'CenterSelection',
    'RootSelection',
    'TreeDirection',
    'coerce_options',

    # 佈局演算法
    'layout_grid',
    'layout_circular',
    'layout_force_directed',
    'layout_radial',
    'layout_tree',

    # 工廠
    'LayoutType',
    'LayoutOutcome',
    'LAYOUTS',
    'create_layout',
    'get_layout_function',
    'apply_layout',
    'center_layout',
    'layout_bounds',
]
