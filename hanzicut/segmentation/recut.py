"""
粘连重切分模块

投影切分会把墨迹相连的两个字切成一个宽块。对宽度明显超过平均字高的块，
逐步提高 "连通" 所需的列像素数阈值，把弱连接处断开；子段仍然过宽就带着
更高的阈值递归，阈值到达上限仍无法切开则保留原块。
"""
from __future__ import annotations
from typing import Dict, List, Tuple
import logging
import numpy as np

from .types import Box, BoxType, LineSegmentation
from .projection import column_profile, find_runs
from .stats import refresh

logger = logging.getLogger(__name__)


def recut_box(ink: np.ndarray, box: Box, reference: float, threshold: int = 1,
              params: Dict | None = None) -> Tuple[Box, ...]:
    """
    以列像素数 >= threshold 为连通标准重切分一个字块

    :param ink: 布尔墨迹掩码（整行）
    :param box: 待切分字块
    :param reference: 参考尺度（行平均高度）
    :param threshold: 当前连通像素阈值
    :param params: 引擎参数
    :return: 切分后的字块（未求高度）；无法切分时为 (box,)
    """
    params = params or {}
    if threshold >= int(params.get('max_threshold', 10)):
        return (box,)

    target = reference * params.get('target_ratio', 5 / 4)
    min_width = int(params.get('min_run_width', 2))
    profile = column_profile(ink, box.start, box.end)

    pieces: List[Box] = []
    for s, e in find_runs(profile, threshold):
        sub = Box(box.start + s, box.start + e, box_type=BoxType.UNCLASSIFIED)
        if sub.width > target:
            pieces.extend(recut_box(ink, sub, reference, threshold + 1, params))
        elif sub.width > min_width:
            pieces.append(sub)

    if not pieces:
        # every sub-run was too thin to keep; do not lose the ink
        return (box,)
    return tuple(pieces)


def needs_recut(box: Box, mean_height: int, params: Dict) -> bool:
    return box.width > mean_height * params.get('trigger_ratio', 4 / 3)


def recut(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    """
    针对粘连严重的字块重切分，宽度大于平均高度 * 4/3 的才处理

    :param seg: 投影切分后的行
    :return: 重切分并刷新高度/尺度后的新行
    """
    ink = seg.ink
    start = int(params.get('start_threshold', 1))
    new_boxes: List[Box] = []
    split_count = 0
    for box in seg.boxes:
        if needs_recut(box, seg.mean_height, params):
            pieces = recut_box(ink, box, seg.mean_height, start, params)
            if len(pieces) > 1:
                split_count += 1
            new_boxes.extend(pieces)
        else:
            new_boxes.append(box)
    logger.debug(f"重切分: {split_count} 个宽块被切开, {len(seg.boxes)} -> {len(new_boxes)}")
    return refresh(seg.replace(boxes=new_boxes), params)
