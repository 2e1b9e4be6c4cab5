"""
佈局參數設定
Layout Options

每種演算法的參數以 dataclass 表示。
外部傳入的參數包（dict 或 dataclass）會逐欄位檢查，
格式錯誤的欄位直接回退為預設值，不會拋出例外。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Any, Callable, Mapping, Optional, Tuple, Type, TypeVar, Union

logger = logging.getLogger(__name__)


class CenterSelection(Enum):
    """放射狀佈局的中心節點選擇方式"""
    FIRST = "first"
    MOST_CONNECTIONS = "most-connections"
    MOST_CENTRAL = "most-central"


class RootSelection(Enum):
    """樹狀佈局的根節點選擇方式"""
    FIRST = "first"
    MOST_CONNECTIONS = "most-connections"
    LEAST_INPUTS = "least-inputs"


class TreeDirection(Enum):
    """樹狀佈局方向"""
    TOP_DOWN = "top-down"
    BOTTOM_UP = "bottom-up"
    LEFT_RIGHT = "left-right"
    RIGHT_LEFT = "right-left"

    @property
    def is_horizontal(self) -> bool:
        return self in (TreeDirection.LEFT_RIGHT, TreeDirection.RIGHT_LEFT)

    @property
    def is_reversed(self) -> bool:
        return self in (TreeDirection.BOTTOM_UP, TreeDirection.RIGHT_LEFT)


# ================== 欄位檢查 ==================

def _finite(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"需要數值，收到 {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError("數值必須有限")
    return value


def _non_negative(value: Any) -> float:
    value = _finite(value)
    if value < 0:
        raise ValueError("數值不可為負")
    return value


def _non_negative_int(value: Any) -> int:
    number = _non_negative(value)
    if number != int(number):
        raise ValueError("需要整數")
    return int(number)


def _columns(value: Any) -> Optional[int]:
    # 0 與未指定相同：依長寬比自動計算
    count = _non_negative_int(value)
    return count or None


def _seed(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
        raise ValueError("seed 必須為非負整數")
    return int(value)


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("需要布林值")
    return value


def _sorter(value: Any) -> Union[bool, Callable[[Any, Any], int]]:
    if isinstance(value, bool) or callable(value):
        return value
    raise TypeError("sort_nodes 需為布林值或比較函數")


def _node_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, Integral)):
        raise TypeError("節點 id 需為字串")
    return str(value)


def _enum(enum_cls: Type[Enum]) -> Callable[[Any], Enum]:
    def check(value: Any) -> Enum:
        if isinstance(value, enum_cls):
            return value
        return enum_cls(value)
    return check


def _opt(default: Any, check: Callable[[Any], Any]) -> Any:
    return field(default=default, metadata={"check": check})


# ================== 各演算法參數 ==================

@dataclass
class GridOptions:
    margin: float = _opt(40.0, _finite)
    spacing: float = _opt(150.0, _non_negative)
    columns: Optional[int] = _opt(None, _columns)
    sort_nodes: Union[bool, Callable[[Any, Any], int]] = _opt(False, _sorter)


@dataclass
class CircularOptions:
    # None 表示依視窗大小決定
    center_x: Optional[float] = _opt(None, _finite)
    center_y: Optional[float] = _opt(None, _finite)
    radius: Optional[float] = _opt(None, _non_negative)
    start_angle: float = _opt(0.0, _finite)
    sort_nodes: Union[bool, Callable[[Any, Any], int]] = _opt(False, _sorter)
    is_donut: bool = _opt(False, _flag)
    inner_radius: Optional[float] = _opt(None, _non_negative)


@dataclass
class ForceOptions:
    iterations: int = _opt(50, _non_negative_int)
    attraction_force: float = _opt(0.1, _finite)
    repulsion_force: float = _opt(2000.0, _finite)
    link_distance: float = _opt(100.0, _non_negative)
    initial_temperature: float = _opt(0.1, _finite)
    cooling_factor: float = _opt(0.95, _non_negative)
    prevent_overlap: bool = _opt(True, _flag)
    randomize_initial_positions: bool = _opt(True, _flag)
    center_gravity: float = _opt(0.1, _finite)
    seed: Optional[int] = _opt(None, _seed)


@dataclass
class RadialOptions:
    center_node_id: Optional[str] = _opt(None, _node_id)
    center_selection_method: CenterSelection = _opt(
        CenterSelection.MOST_CONNECTIONS, _enum(CenterSelection))
    initial_radius: Optional[float] = _opt(None, _non_negative)
    radius_increment: Optional[float] = _opt(None, _non_negative)
    min_angle_separation: float = _opt(0.1, _non_negative)
    sort_nodes_at_level: bool = _opt(True, _flag)


@dataclass
class TreeOptions:
    direction: TreeDirection = _opt(TreeDirection.TOP_DOWN, _enum(TreeDirection))
    horizontal_spacing: float = _opt(120.0, _finite)
    vertical_spacing: float = _opt(100.0, _finite)
    root_id: Optional[str] = _opt(None, _node_id)
    root_selection_method: RootSelection = _opt(
        RootSelection.LEAST_INPUTS, _enum(RootSelection))
    level_balancing: float = _opt(0.5, _finite)


OptionsT = TypeVar("OptionsT", GridOptions, CircularOptions, ForceOptions,
                   RadialOptions, TreeOptions)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def coerce_options(cls: Type[OptionsT], raw: Any = None) -> Tuple[OptionsT, Tuple[str, ...]]:
    """
    將任意參數包轉為指定的參數 dataclass。

    接受 None、任一參數 dataclass，或 dict（snake_case 與 camelCase 鍵皆可）。
    不屬於此演算法的鍵會被忽略；值為 None 的欄位使用預設值；
    檢查失敗的欄位同樣使用預設值，並記錄在回傳的欄位名稱列表中。

    Args:
        cls: 目標參數類別
        raw: 原始參數包

    Returns:
        (參數物件, 被替換為預設值的欄位名稱)
    """
    if raw is None:
        return cls(), ()

    if is_dataclass(raw) and not isinstance(raw, type):
        raw = {f.name: getattr(raw, f.name) for f in fields(raw)}

    if not isinstance(raw, Mapping):
        logger.debug("無法解讀的參數包 %r，全部使用預設值", raw)
        return cls(), ()

    values = {}
    ignored = []
    for f in fields(cls):
        if f.name in raw:
            value = raw[f.name]
        elif _camel(f.name) in raw:
            value = raw[_camel(f.name)]
        else:
            continue

        if value is None:
            continue

        try:
            values[f.name] = f.metadata["check"](value)
        except (TypeError, ValueError) as e:
            logger.debug("參數 %s=%r 無效（%s），改用預設值", f.name, value, e)
            ignored.append(f.name)

    return cls(**values), tuple(ignored)
