"""
垂直投影切分模块
按列统计墨迹像素数，连续非零列构成一个候选字块
"""
from __future__ import annotations
from typing import Dict, List, Tuple, Optional
import logging
import numpy as np

from .types import Box, BoxType, LineSegmentation, ink_mask
from .stats import refresh

logger = logging.getLogger(__name__)


def column_profile(ink: np.ndarray, start: int = 0, end: Optional[int] = None) -> np.ndarray:
    """
    计算列投影（每列的墨迹像素数）

    :param ink: 布尔墨迹掩码
    :param start: 起始列
    :param end: 结束列（不含），默认到最右
    :return: 每列计数的一维数组
    """
    if end is None:
        end = ink.shape[1]
    return ink[:, start:end].sum(axis=0).astype(np.int64)


def find_runs(profile: np.ndarray, threshold: int = 1) -> List[Tuple[int, int]]:
    """Maximal [start, end) runs whose count is >= threshold."""
    runs: List[Tuple[int, int]] = []
    length = profile.shape[0]
    i = 0
    while i < length:
        if profile[i] < threshold:
            i += 1
            continue
        j = i
        while j < length and profile[j] >= threshold:
            j += 1
        runs.append((i, j))
        i = j
    return runs


def cut_columns(bitmap: np.ndarray, params: Dict) -> Tuple[Box, ...]:
    """Split a line bitmap into column-range boxes (heights unresolved)."""
    ink = ink_mask(bitmap, int(params.get('background_value', 255)))
    if ink.size == 0:
        return ()
    min_width = int(params.get('min_run_width', 2))
    boxes = tuple(Box(s, e, box_type=BoxType.UNCLASSIFIED)
                  for s, e in find_runs(column_profile(ink), 1)
                  if e - s > min_width)
    logger.debug(f"投影切分: {len(boxes)} 个字块")
    return boxes


def cut(bitmap: np.ndarray, params: Dict) -> LineSegmentation:
    """
    投影切分入口：切分、求字块高度、估计行尺度

    :param bitmap: 单行二值图（墨迹为低值，背景为 255）
    :param params: 引擎参数（见 config.segment_params）
    :return: LineSegmentation
    """
    bitmap = np.asarray(bitmap)
    background = int(params.get('background_value', 255))
    seg = LineSegmentation(bitmap=bitmap, mean_height=1, mean_width=1,
                           boxes=cut_columns(bitmap, params), background=background)
    return refresh(seg, params)
