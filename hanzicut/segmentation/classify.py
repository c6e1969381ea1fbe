"""
形状判定与类型标注模块

汉字大致是方的，且与本行标准字大小相近；据此判定单个字块是否为完整汉字。
合并之后再借助邻居把细长（如 "目"）、扁平（如 "一"）的字补标为汉字，
剩余字块按尺寸标为 标点/字母数字/噪点。
"""
from __future__ import annotations
from typing import Dict, List
import logging

from .types import Box, BoxType, LineSegmentation

logger = logging.getLogger(__name__)


def _ratio(a: float, b: float) -> float:
    """较小值 / 较大值，结果 <= 1"""
    if a <= 0 or b <= 0:
        return 0.0
    return a / b if a < b else b / a


def is_ideograph_shape(box: Box, reference: float, params: Dict | None = None) -> bool:
    """
    判断是不是一个合格的汉字区域，必须同时满足：
    1. 长宽比 >= 0.83
    2. 宽度与平均汉字高度比 >= 0.8
    3. 高度与平均汉字高度比 >= 0.8
    """
    params = params or {}
    width, height = float(box.width), float(box.height)
    return (_ratio(width, height) >= params.get('min_aspect_ratio', 0.83)
            and _ratio(width, reference) >= params.get('min_width_ratio', 0.8)
            and _ratio(height, reference) >= params.get('min_height_ratio', 0.8))


def is_similar_shape(a: Box, b: Box, params: Dict | None = None) -> bool:
    """
    两个字块是否相似，用于防止 "2010" 这种数字被合并：
    1. 宽、高之比都不低于 min_similarity
    2. 上下边界相差都不超过 similar_margin 个像素
    """
    params = params or {}
    min_similarity = params.get('min_similarity', 0.8)
    if _ratio(a.width, b.width) < min_similarity or _ratio(a.height, b.height) < min_similarity:
        return False
    margin = params.get('similar_margin', 6)
    return abs(a.top - b.top) <= margin and abs(a.bottom - b.bottom) <= margin


def _passes_propagation(box: Box, mean_height: int, mean_width: int, params: Dict) -> bool:
    ratio_w = _ratio(box.width, mean_width)
    ratio_h = _ratio(box.height, mean_height)
    return (ratio_w > params.get('propagate_width_ratio', 0.8)
            or (ratio_h > params.get('propagate_height_ratio', 0.8)
                and ratio_w > params.get('propagate_loose_width_ratio', 0.5)))


def propagate_ideographs(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    """Mark near-glyph-sized boxes next to an ideograph as ideographs too.

    The pass runs left to right; a box relabelled here already counts as an
    ideograph neighbour for the box after it.
    """
    boxes: List[Box] = list(seg.boxes)
    promoted = 0
    for i, box in enumerate(boxes):
        if box.box_type == BoxType.IDEOGRAPH:
            continue
        neighbours = boxes[max(0, i - 1):i] + boxes[i + 1:i + 2]
        if not any(n.box_type == BoxType.IDEOGRAPH for n in neighbours):
            continue
        if _passes_propagation(box, seg.mean_height, seg.mean_width, params):
            boxes[i] = box.with_type(BoxType.IDEOGRAPH)
            promoted += 1
    logger.debug(f"邻居补标汉字: {promoted} 个")
    return seg.replace(boxes=boxes)


def residual_type(box: Box, params: Dict) -> BoxType:
    if max(box.width, box.height) <= params.get('noise_max_size', 4):
        return BoxType.NOISE
    small = params.get('small_punct_size', 15)
    if box.width <= small and box.height <= small:
        return BoxType.SMALL_PUNCT
    return BoxType.ALNUM_PUNCT


def label_residual(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    """为仍未分类的字块标注 噪点 / 小标点 / 字母数字大标点"""
    boxes = tuple(box.with_type(residual_type(box, params))
                  if box.box_type == BoxType.UNCLASSIFIED else box
                  for box in seg.boxes)
    return seg.replace(boxes=boxes)


def classify(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    seg = propagate_ideographs(seg, params)
    if params.get('label_residual', True):
        seg = label_residual(seg, params)
    return seg
