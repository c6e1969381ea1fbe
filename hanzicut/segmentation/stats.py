"""
行尺度估计模块
计算单行所有字块的平均高度/宽度，标点和特殊符号不算在内
"""
from __future__ import annotations
from typing import Dict, Iterable, Tuple
import logging

from .types import Box, LineSegmentation
from .heights import resolve_heights

logger = logging.getLogger(__name__)


def is_reference_sample(box: Box, rows: int, params: Dict) -> bool:
    """
    判断字块能否作为平均尺寸的样本

    排除三类：
      - 长宽都很小的标点
      - 窄而几乎占满行高的符号，如 "|"
      - 宽度不到行高 3/5 的窄块（多为半个字或小字母）
    """
    max_w = params.get('min_patch_width', 15)
    max_h = params.get('min_patch_height', 15)
    width, height = box.width, box.height
    if width <= max_w and height <= max_h:
        return False
    if width <= max_w and height >= params.get('bar_height_ratio', 0.9) * rows:
        return False
    if width <= rows * params.get('narrow_width_ratio', 0.6):
        return False
    return True


def estimate_line_scale(boxes: Iterable[Box], rows: int, cols: int, params: Dict) -> Tuple[int, int]:
    """
    :param boxes: 已求高度的字块
    :param rows: 行图高度
    :param cols: 行图宽度
    :return: (mean_height, mean_width)，始终为正整数
    """
    samples = [box for box in boxes if is_reference_sample(box, rows, params)]
    if not samples:
        margin = int(params.get('fallback_margin', 4))
        return max(1, rows - margin), max(1, cols - margin)
    mean_height = sum(box.height for box in samples) // len(samples)
    mean_width = sum(box.width for box in samples) // len(samples)
    return max(1, mean_height), max(1, mean_width)


def refresh(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    """Re-resolve box heights and the line scale after the boxes changed."""
    boxes = resolve_heights(seg.ink, seg.boxes)
    mean_height, mean_width = estimate_line_scale(boxes, seg.rows, seg.cols, params)
    logger.debug(f"行尺度: 平均高度 {mean_height}, 平均宽度 {mean_width} ({len(boxes)} 个字块)")
    return seg.replace(boxes=boxes, mean_height=mean_height, mean_width=mean_width)
