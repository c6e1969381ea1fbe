"""Line bitmap loading (ink = 0, background = 255)."""
from __future__ import annotations
import os
import cv2
import numpy as np


def binarize_line(gray: np.ndarray, mode: str = 'otsu', adaptive_block: int = 31, adaptive_C: int = 3) -> np.ndarray:
    """Threshold a gray line image so ink becomes 0 and background 255."""
    if mode == 'adaptive':
        if adaptive_block % 2 == 0:
            adaptive_block += 1
        return cv2.adaptiveThreshold(gray, 255, cv2.ADAPTIVE_THRESH_MEAN_C,
                                     cv2.THRESH_BINARY, adaptive_block, adaptive_C)
    _, bin_img = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return bin_img


def load_line_bitmap(path: str, binarize: str | None = None,
                     adaptive_block: int = 31, adaptive_C: int = 3) -> np.ndarray:
    if not os.path.isfile(path):
        raise FileNotFoundError(f'输入不存在: {path}')
    gray = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
    if gray is None:
        raise ValueError(f'无法读取图像: {path}')
    if binarize:
        gray = binarize_line(gray, mode=binarize, adaptive_block=adaptive_block, adaptive_C=adaptive_C)
    return gray
