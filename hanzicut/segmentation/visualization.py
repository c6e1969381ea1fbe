"""
可视化模块
在行图上画出每个字块的边框，按阶段 (cut / recut / merge) 保存调试图
"""
import os
import cv2
import numpy as np

from .types import BoxType, LineSegmentation

# BGR
TYPE_COLORS = {
    BoxType.UNCLASSIFIED: (0, 255, 0),    # 绿色
    BoxType.IDEOGRAPH: (0, 0, 255),       # 红色
    BoxType.ALNUM_PUNCT: (255, 0, 0),     # 蓝色
    BoxType.SMALL_PUNCT: (0, 165, 255),   # 橙色
    BoxType.NOISE: (128, 128, 128),       # 灰色
}


def draw_boxes(seg: LineSegmentation) -> np.ndarray:
    """
    在行图副本上标注字块

    :param seg: 行分割结果
    :return: BGR 标注图
    """
    bitmap = np.ascontiguousarray(seg.bitmap, dtype=np.uint8)
    annotated = cv2.cvtColor(bitmap, cv2.COLOR_GRAY2BGR)
    for box in seg.boxes:
        if not box.has_height:
            continue
        color = TYPE_COLORS.get(box.box_type, (0, 255, 0))
        cv2.rectangle(annotated, (box.start, box.top), (box.end, box.bottom), color, 1)
    return annotated


def save_stage_overlay(seg: LineSegmentation, line_index: int, stage_dir: str) -> str:
    """
    保存某一阶段的标注图

    :param seg: 行分割结果
    :param line_index: 行号，作为文件名
    :param stage_dir: 阶段目录，如 <output>/cut
    :return: 保存的文件路径
    """
    os.makedirs(stage_dir, exist_ok=True)
    path = os.path.join(stage_dir, f"{line_index}.png")
    cv2.imwrite(path, draw_boxes(seg))
    return path
