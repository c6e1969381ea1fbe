"""
字块高度模块
为每个字块找到上下边界：从上往下找 top，从下往上找 bottom
"""
from __future__ import annotations
from typing import Iterable, Tuple
import numpy as np

from .types import Box


def resolve_box_height(ink: np.ndarray, box: Box) -> Box:
    """
    在字块的列范围内寻找第一行和最后一行墨迹

    :param ink: 布尔墨迹掩码
    :param box: 字块
    :return: 带 top/bottom 的新字块，保证 bottom > top
    """
    rows = np.flatnonzero(ink[:, box.start:box.end].any(axis=1))
    if rows.size == 0:
        return box.with_height(0, 1)
    top, bottom = int(rows[0]), int(rows[-1])
    # make sure the height can not be zero
    if bottom <= top:
        bottom = top + 1
    return box.with_height(top, bottom)


def resolve_heights(ink: np.ndarray, boxes: Iterable[Box]) -> Tuple[Box, ...]:
    return tuple(resolve_box_height(ink, box) for box in boxes)
