"""
单字图输出模块
把第 i 行切分好的汉字存成 <dirname>/<i>/<count>.png
"""
from __future__ import annotations
from typing import Dict, List
import os
import cv2
import numpy as np

from .types import Box, LineSegmentation
from .classify import is_ideograph_shape
from ..utils.path import ensure_dir


def crop_glyph(seg: LineSegmentation, box: Box, padding: int = 7) -> np.ndarray:
    """Crop a box (bottom row included) and add ``padding`` background pixels on each side (2 * padding in total per axis)."""
    bottom = min(seg.rows, box.bottom + 1)
    roi = np.ascontiguousarray(seg.bitmap[box.top:bottom, box.start:box.end])
    return cv2.copyMakeBorder(roi, padding, padding, padding, padding,
                              cv2.BORDER_CONSTANT, value=seg.background)


def save_glyph_crops(seg: LineSegmentation, line_index: int, out_dir: str,
                     params: Dict | None = None, padding: int = 7) -> List[str]:
    """
    :param seg: 行分割结果
    :param line_index: 第 i 行文字
    :param out_dir: 存放单字图片的目录
    :param params: 形状判定参数
    :param padding: 单字每一侧的空白像素数（非两侧合计）
    :return: 写出的文件路径
    """
    line_dir = ensure_dir(os.path.join(out_dir, str(line_index)))
    written: List[str] = []
    for box in seg.boxes:
        if not is_ideograph_shape(box, seg.mean_height, params):
            continue
        path = os.path.join(line_dir, f"{len(written)}.png")
        cv2.imwrite(path, crop_glyph(seg, box, padding))
        written.append(path)
    return written
