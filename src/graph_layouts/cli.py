"""
命令列介面
Command Line Interface

讀取圖形（JSON 或 CSV）與設定檔，執行指定佈局並輸出座標 JSON。
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .factory import LayoutType, center_layout, create_layout, resolve_layout_type
from .types import Edge, Node, as_edges, as_nodes

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 600.0
DEFAULT_LAYOUT = LayoutType.FORCE.value


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令列參數"""
    parser = argparse.ArgumentParser(description="圖形佈局座標計算工具")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--graph", metavar="PATH",
                        help="圖形 JSON 檔案（含 nodes 與 edges）")
    source.add_argument("--nodes", metavar="PATH", help="節點 CSV 檔案（需有 id 欄位）")
    parser.add_argument("--edges", metavar="PATH",
                        help="邊 CSV 檔案（需有 source、target 欄位）")
    parser.add_argument("--config", metavar="PATH", help="設定檔路徑 (JSON)")
    parser.add_argument("--layout", help="佈局演算法："
                        + ", ".join(t.value for t in LayoutType))
    parser.add_argument("--width", type=float, help=f"視窗寬度 (預設 {DEFAULT_WIDTH:g})")
    parser.add_argument("--height", type=float, help=f"視窗高度 (預設 {DEFAULT_HEIGHT:g})")
    parser.add_argument("--seed", type=int, help="力導向佈局隨機種子")
    parser.add_argument("--center", action="store_true", help="將佈局中心平移到原點")
    parser.add_argument("--output", metavar="PATH", help="輸出檔案，預設為標準輸出")
    parser.add_argument("-v", "--verbose", action="store_true", help="顯示除錯訊息")
    return parser.parse_args(argv)


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """讀取設定檔，未指定時回傳空設定"""
    if not path:
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError("設定檔最外層必須是物件")
    return config


def load_graph(args: argparse.Namespace) -> Tuple[List[Node], List[Edge]]:
    """載入節點與邊"""
    if args.graph:
        with open(args.graph, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("圖形檔最外層必須是物件")
        nodes, edges = data.get("nodes", []), data.get("edges", [])
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise ValueError("圖形檔的 nodes 與 edges 必須是陣列")
        return as_nodes(nodes), as_edges(edges)

    nodes = as_nodes(pd.read_csv(args.nodes, encoding="utf-8-sig", dtype=str))
    edges: List[Edge] = []
    if args.edges:
        edges = as_edges(pd.read_csv(args.edges, encoding="utf-8-sig", dtype=str))
    return nodes, edges


def resolve_settings(args: argparse.Namespace, config: Dict[str, Any]) -> Tuple[str, float, float, Any]:
    """合併命令列與設定檔，命令列優先"""
    layout = args.layout or config.get("layout", DEFAULT_LAYOUT)
    width = args.width if args.width is not None else config.get("width", DEFAULT_WIDTH)
    height = args.height if args.height is not None else config.get("height", DEFAULT_HEIGHT)

    # 設定檔的 layout_options 以正規化後的演算法名稱查找
    resolved = resolve_layout_type(layout)
    key = resolved.value if resolved else str(layout).strip().lower()
    layout_options = config.get("layout_options", {})
    options = layout_options.get(key, {}) if isinstance(layout_options, dict) else {}
    if args.seed is not None:
        options = {**options, "seed": args.seed} if isinstance(options, dict) else {"seed": args.seed}

    try:
        width, height = float(width), float(height)
    except TypeError:
        raise ValueError(f"視窗大小必須是數值：width={width!r}, height={height!r}")

    return layout, width, height, options


def build_report(outcome, center: bool) -> Dict[str, Any]:
    positions = center_layout(outcome.positions) if center else outcome.positions
    return {
        "layout": outcome.layout_type.value,
        "diagnostic": outcome.diagnostic,
        "ignored_options": list(outcome.ignored_options),
        "positions": {node_id: pos.to_dict() for node_id, pos in positions.items()},
    }


def main(argv: Optional[List[str]] = None) -> int:
    """主執行流程"""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        nodes, edges = load_graph(args)
        layout, width, height, options = resolve_settings(args, config)
    except (OSError, pd.errors.ParserError, ValueError, TypeError) as e:
        # json.JSONDecodeError 為 ValueError 子類別
        print(f"讀取輸入失敗：{e}", file=sys.stderr)
        return 1

    outcome = create_layout(nodes, edges, layout, width, height, options)
    if outcome.diagnostic:
        logger.warning(outcome.diagnostic)
    if outcome.ignored_options:
        logger.warning("以下參數無效，已改用預設值：%s", ", ".join(outcome.ignored_options))
    logger.info("已完成 %s 佈局：%d 個節點", outcome.layout_type.value, len(outcome.positions))

    text = json.dumps(build_report(outcome, args.center), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("已輸出 %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
