"""
偏旁合并模块
把被投影切开的汉字（左右结构、带间隙的偏旁）重新合并成一个字块

从左到右扫描，每个位置依次尝试：
  1. 当前块 + 后两块合并后符合汉字形状 -> 合并三块
  2. 当前块 + 后三块合并后符合汉字形状 -> 合并四块
  3. 与下一块两两合并，以下任一条件成立则不合并：
     a. 两块间距 >= min_margin
     b. 当前块本身已是合格汉字
     c. 合并后不符合汉字形状
     d. 两块非常相似且都矮于平均高度（连续数字或字母）
     e. 下一块是位于下半行、后面留有较大间距的小标点
"""
from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
import logging

from .types import Box, BoxType, LineSegmentation
from .classify import is_ideograph_shape, is_similar_shape
from .stats import estimate_line_scale

logger = logging.getLogger(__name__)


def _span(boxes: Sequence[Box], i: int, count: int) -> Box:
    merged = boxes[i]
    for other in boxes[i + 1:i + count]:
        merged = merged.union(other)
    return merged.with_type(BoxType.IDEOGRAPH)


def _is_trailing_punct(boxes: Sequence[Box], i: int, seg: LineSegmentation, params: Dict) -> bool:
    """下一块 (i+1) 是否像一个独立的小标点（根据长宽、位置、与再下一块的距离）"""
    nxt = boxes[i + 1]
    if i + 2 >= len(boxes):
        return False
    gap_after = boxes[i + 2].start - nxt.end
    return (nxt.width < params.get('punct_width', 15)
            and nxt.height < params.get('punct_height', 15)
            and nxt.top > seg.rows // 2
            and gap_after > seg.mean_height * params.get('punct_gap_ratio', 1 / 3))


def can_merge_pair(boxes: Sequence[Box], i: int, seg: LineSegmentation, params: Dict) -> bool:
    left, right = boxes[i], boxes[i + 1]
    reference = seg.mean_height
    if right.start - left.end >= params.get('min_margin', 6):
        return False
    if is_ideograph_shape(left, reference, params):
        return False
    if not is_ideograph_shape(left.union(right), reference, params):
        return False
    short = int(reference * params.get('short_height_ratio', 0.9))
    if is_similar_shape(left, right, params) and left.height < short and right.height < short:
        return False
    if _is_trailing_punct(boxes, i, seg, params):
        return False
    return True


def _keep(box: Box, reference: int, params: Dict) -> Box:
    if is_ideograph_shape(box, reference, params):
        return box.with_type(BoxType.IDEOGRAPH)
    return box


def merge_decision(boxes: Sequence[Box], i: int, seg: LineSegmentation,
                   params: Dict) -> Tuple[Box, int]:
    """
    决定位置 i 输出的字块

    :param boxes: 合并前的字块序列（前瞻索引都基于它）
    :param i: 当前位置
    :return: (输出字块, 消耗的输入字块数)
    """
    reference = seg.mean_height
    n = len(boxes)
    if i + 1 >= n:
        return _keep(boxes[i], reference, params), 1
    for count in (3, 4):
        if i + count <= n:
            candidate = _span(boxes, i, count)
            if is_ideograph_shape(candidate, reference, params):
                return candidate, count
    if can_merge_pair(boxes, i, seg, params):
        return _span(boxes, i, 2), 2
    return _keep(boxes[i], reference, params), 1


def merge(seg: LineSegmentation, params: Dict) -> LineSegmentation:
    """
    合并分离的汉字

    :param seg: 重切分后的行
    :return: 合并并刷新尺度后的新行，字块数不增加
    """
    boxes = seg.boxes
    merged: List[Box] = []
    i = 0
    while i < len(boxes):
        box, consumed = merge_decision(boxes, i, seg, params)
        merged.append(box)
        i += consumed
    logger.debug(f"偏旁合并: {len(boxes)} -> {len(merged)}")
    # 合并块保留各部件高度的并集，不在整个列范围上重新求高度（列间的连笔不计入）
    mean_height, mean_width = estimate_line_scale(merged, seg.rows, seg.cols, params)
    return seg.replace(boxes=merged, mean_height=mean_height, mean_width=mean_width)
