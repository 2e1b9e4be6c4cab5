"""
共用型別與輸入正規化
Shared Types and Input Normalization

所有佈局演算法共用的資料結構：節點、邊、座標與佈局結果，
以及把各種輸入格式（物件、字典、tuple、DataFrame）轉成統一型別的工具。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import networkx as nx
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """圖形節點：只有 id 影響佈局，其餘屬性原樣保留"""
    id: str
    attrs: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Edge:
    """連線：source -> target"""
    source: str
    target: str
    id: Optional[str] = None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


# 佈局結果：{node_id: Position}
LayoutResult = Dict[str, Position]


def _node_from_item(item: Any) -> Optional[Node]:
    if isinstance(item, Node):
        return item
    if isinstance(item, Mapping):
        node_id = item.get("id")
        if node_id is None:
            return None
        attrs = {k: v for k, v in item.items() if k != "id"}
        return Node(str(node_id), attrs)
    if item is None:
        return None
    node_id = getattr(item, "id", item)
    return Node(str(node_id))


def as_nodes(nodes: Any) -> List[Node]:
    """
    將輸入的節點集合轉為 Node 列表。

    支援 Node、含 "id" 的字典、單純的 id 值，以及含 "id" 欄位的
    pandas DataFrame。保留呼叫端的順序；重複的 id 只保留第一個。

    Args:
        nodes: 節點集合

    Returns:
        去重後的 Node 列表（新列表，不修改輸入）
    """
    if nodes is None:
        return []

    if isinstance(nodes, pd.DataFrame):
        if "id" not in nodes.columns:
            logger.debug("節點表缺少 id 欄位，視為空圖")
            return []
        items: Iterable[Any] = nodes.dropna(subset=["id"]).to_dict(orient="records")
    else:
        items = nodes

    result: List[Node] = []
    seen = set()
    for item in items:
        node = _node_from_item(item)
        if node is None:
            logger.debug("略過沒有 id 的節點: %r", item)
            continue
        if node.id in seen:
            continue
        seen.add(node.id)
        result.append(node)
    return result


def _edge_from_item(item: Any) -> Optional[Edge]:
    if isinstance(item, Edge):
        return item
    if isinstance(item, Mapping):
        src, dst = item.get("source"), item.get("target")
        edge_id = item.get("id")
    elif isinstance(item, (tuple, list)) and len(item) >= 2:
        src, dst = item[0], item[1]
        edge_id = None
    else:
        src = getattr(item, "source", None)
        dst = getattr(item, "target", None)
        edge_id = getattr(item, "id", None)

    if src is None or dst is None:
        return None
    return Edge(str(src), str(dst), None if edge_id is None else str(edge_id))


def as_edges(edges: Any) -> List[Edge]:
    """
    將輸入的邊集合轉為 Edge 列表。

    支援 Edge、含 source/target 的字典、(src, dst) tuple，以及含
    source/target 欄位的 DataFrame。缺少端點的項目會被略過。
    """
    if edges is None:
        return []

    if isinstance(edges, pd.DataFrame):
        if not {"source", "target"}.issubset(edges.columns):
            logger.debug("邊表缺少 source/target 欄位，忽略所有邊")
            return []
        items = edges.dropna(subset=["source", "target"]).to_dict(orient="records")
    else:
        items = edges

    result: List[Edge] = []
    for item in items:
        edge = _edge_from_item(item)
        if edge is None:
            logger.debug("略過不完整的邊: %r", item)
            continue
        result.append(edge)
    return result


def valid_edges(node_ids: Iterable[str], edges: Iterable[Edge],
                *, skip_self_loops: bool = True) -> List[Edge]:
    """過濾掉懸空（端點不在節點集合中）與自迴圈的邊"""
    ids = set(node_ids)
    kept = []
    for edge in edges:
        if edge.source not in ids or edge.target not in ids:
            continue
        if skip_self_loops and edge.is_self_loop:
            continue
        kept.append(edge)
    return kept


def build_undirected_graph(nodes: List[Node], edges: List[Edge]) -> nx.Graph:
    """建立無向鄰接圖（排除懸空邊與自迴圈），節點順序與輸入一致"""
    graph = nx.Graph()
    graph.add_nodes_from(node.id for node in nodes)
    for edge in valid_edges(graph.nodes, edges):
        graph.add_edge(edge.source, edge.target)
    return graph


def build_directed_graph(nodes: List[Node], edges: List[Edge]) -> nx.DiGraph:
    """建立有向鄰接圖（排除懸空邊與自迴圈），節點順序與輸入一致"""
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    for edge in valid_edges(graph.nodes, edges):
        graph.add_edge(edge.source, edge.target)
    return graph


def connection_counts(nodes: List[Node], edges: List[Edge]) -> Dict[str, int]:
    """
    計算每個節點的連線數。

    與鄰接集合不同，平行邊會重複計數；懸空邊與自迴圈不計。
    """
    counts = {node.id: 0 for node in nodes}
    for edge in valid_edges(counts, edges):
        counts[edge.source] += 1
        counts[edge.target] += 1
    return counts


def ordered_nodes(nodes: List[Node], sort_nodes: Any = False) -> List[Node]:
    """
    依排序設定回傳節點副本。

    sort_nodes 為 True 時依 id 排序；為雙參數比較函數時以其排序；
    否則維持輸入順序。排序皆為穩定排序。
    """
    copied = list(nodes)
    if callable(sort_nodes):
        copied.sort(key=cmp_to_key(sort_nodes))
    elif sort_nodes:
        copied.sort(key=lambda node: node.id)
    return copied
