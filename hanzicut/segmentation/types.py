"""Box / line data model shared by every segmentation stage.

A line bitmap is a 2-D uint8 array with ink as low values and background as
255. Boxes are immutable; each stage builds a new tuple of boxes and a new
``LineSegmentation`` rather than editing the previous one.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Optional, Tuple
import numpy as np


class BoxType(IntEnum):
    """Box 类型，数值即记录文件中的 typeCode"""
    UNCLASSIFIED = 0    # 未定义
    IDEOGRAPH = 1       # 汉字
    ALNUM_PUNCT = 2     # 英文字母（大小写），数字，大标点
    SMALL_PUNCT = 3     # 小标点
    NOISE = 4           # 噪音


class SegmentationInvariantError(AssertionError):
    """A stage produced a box sequence that breaks the line invariants."""


@dataclass(frozen=True)
class Box:
    start: int                      # 起点列（含）
    end: int                        # 末点列（不含）
    top: Optional[int] = None       # 最高墨迹行
    bottom: Optional[int] = None    # 最低墨迹行
    box_type: BoxType = BoxType.UNCLASSIFIED

    @property
    def width(self) -> int:
        return self.end - self.start

    @property
    def height(self) -> int:
        if not self.has_height:
            return 0
        return self.bottom - self.top

    @property
    def has_height(self) -> bool:
        return self.top is not None and self.bottom is not None

    def with_height(self, top: int, bottom: int) -> 'Box':
        return replace(self, top=int(top), bottom=int(bottom))

    def with_type(self, box_type: BoxType) -> 'Box':
        return replace(self, box_type=box_type)

    def union(self, other: 'Box', box_type: BoxType = BoxType.UNCLASSIFIED) -> 'Box':
        """Bounding box of two boxes; raises ValueError unless both heights are resolved."""
        if not (self.has_height and other.has_height):
            raise ValueError(f"union needs resolved heights: {self} / {other}")
        return Box(min(self.start, other.start), max(self.end, other.end),
                   min(self.top, other.top), max(self.bottom, other.bottom), box_type)

    def as_tuple(self) -> Tuple[int, int, int, int, int]:
        return self.start, self.top, self.end, self.bottom, int(self.box_type)


def ink_mask(bitmap: np.ndarray, background: int = 255) -> np.ndarray:
    """Foreground mask: every sample that is not the background value."""
    return np.asarray(bitmap) != background


@dataclass(frozen=True)
class LineSegmentation:
    bitmap: np.ndarray = field(repr=False, compare=False)
    mean_height: int
    mean_width: int
    boxes: Tuple[Box, ...] = ()
    background: int = 255

    @property
    def rows(self) -> int:
        return int(self.bitmap.shape[0])

    @property
    def cols(self) -> int:
        return int(self.bitmap.shape[1])

    @property
    def ink(self) -> np.ndarray:
        return ink_mask(self.bitmap, self.background)

    def replace(self, **changes) -> 'LineSegmentation':
        if 'boxes' in changes:
            changes['boxes'] = tuple(changes['boxes'])
        return replace(self, **changes)

    def __len__(self) -> int:
        return len(self.boxes)


def check_invariants(seg: LineSegmentation) -> None:
    """Raise SegmentationInvariantError if the line state is inconsistent."""
    if seg.mean_height <= 0 or seg.mean_width <= 0:
        raise SegmentationInvariantError(
            f'non-positive line scale: height={seg.mean_height} width={seg.mean_width}')
    prev = None
    for idx, box in enumerate(seg.boxes):
        if box.width <= 0:
            raise SegmentationInvariantError(f'box {idx} has width {box.width}: {box}')
        if box.has_height and box.bottom <= box.top:
            raise SegmentationInvariantError(f'box {idx} has zero height: {box}')
        if prev is not None and box.start <= prev.start:
            raise SegmentationInvariantError(
                f'box {idx} out of order: start {box.start} after {prev.start}')
        prev = box
